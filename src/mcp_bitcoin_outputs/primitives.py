"""Bitcoin script opcodes and data push encoding.

Pushes pick the smallest push opcode for the data size:
- < 76 bytes: direct push (1 byte length)
- 76-255 bytes: OP_PUSHDATA1 (1 byte length)
- 256-65535 bytes: OP_PUSHDATA2 (2 byte length, little-endian)
- > 65535 bytes: OP_PUSHDATA4 (4 byte length, little-endian)
"""

from typing import Iterator, Optional, Tuple

# Bitcoin script opcodes
OP_0 = 0x00
OP_FALSE = OP_0
OP_PUSHDATA1 = 0x4C
OP_PUSHDATA2 = 0x4D
OP_PUSHDATA4 = 0x4E
OP_1 = 0x51
OP_IF = 0x63
OP_ENDIF = 0x68
OP_DUP = 0x76
OP_EQUALVERIFY = 0x88
OP_HASH160 = 0xA9
OP_CHECKSIG = 0xAC

# Largest element the interpreter will push onto the stack.
MAX_SCRIPT_ELEMENT_SIZE = 520


def encode_push(data: bytes) -> bytes:
    """Encode a single data push.

    Args:
        data: Bytes to push onto the stack

    Returns:
        Push opcode, length prefix and data
    """
    length = len(data)

    if length < 76:
        return bytes([length]) + data
    elif length <= 255:
        return bytes([OP_PUSHDATA1, length]) + data
    elif length <= 65535:
        return bytes([OP_PUSHDATA2]) + length.to_bytes(2, 'little') + data
    else:
        return bytes([OP_PUSHDATA4]) + length.to_bytes(4, 'little') + data


def iter_script(script: bytes) -> Iterator[Tuple[int, Optional[bytes]]]:
    """Walk a script, yielding (opcode, pushed data) pairs.

    Non-push opcodes yield None as data. OP_0 yields empty bytes.

    Raises:
        ValueError: If a push is truncated
    """
    pos = 0
    while pos < len(script):
        opcode = script[pos]
        pos += 1

        if opcode == OP_0:
            yield opcode, b""
            continue
        if opcode < OP_PUSHDATA1:
            length = opcode
        elif opcode == OP_PUSHDATA1:
            if pos >= len(script):
                raise ValueError("Truncated PUSHDATA1 script")
            length = script[pos]
            pos += 1
        elif opcode == OP_PUSHDATA2:
            if pos + 2 > len(script):
                raise ValueError("Truncated PUSHDATA2 script")
            length = int.from_bytes(script[pos:pos+2], 'little')
            pos += 2
        elif opcode == OP_PUSHDATA4:
            if pos + 4 > len(script):
                raise ValueError("Truncated PUSHDATA4 script")
            length = int.from_bytes(script[pos:pos+4], 'little')
            pos += 4
        else:
            yield opcode, None
            continue

        if pos + length > len(script):
            raise ValueError(f"Script truncated: expected {length} bytes, got {len(script) - pos}")
        yield opcode, script[pos:pos+length]
        pos += length
