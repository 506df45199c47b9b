"""Ordinals inscription envelope encoding and decoding.

The envelope is a tapscript leaf that locks to the recipient key and carries
the inscription in a branch that never executes:

    <x-only key> OP_CHECKSIG
    OP_FALSE OP_IF
      "ord" 0x01 <content type>
      OP_0 <body chunk> <body chunk> ...
    OP_ENDIF

Body chunks are at most 520 bytes, the largest element a script may push.
"""

from dataclasses import dataclass

from mcp_bitcoin_outputs.errors import InvalidPayload, PayloadTooLarge
from mcp_bitcoin_outputs.keys import PublicKey
from mcp_bitcoin_outputs.primitives import (
    MAX_SCRIPT_ELEMENT_SIZE,
    OP_0,
    OP_CHECKSIG,
    OP_ENDIF,
    OP_FALSE,
    OP_IF,
    encode_push,
    iter_script,
)
from mcp_bitcoin_outputs.protocols.base import InscriptionBody


PROTOCOL_ID = b"ord"
CONTENT_TYPE_TAG = b"\x01"

# Witness bytes weigh one unit each and a standard transaction is capped at
# 400,000 weight units, so no standard reveal can carry a larger body.
MAX_INSCRIPTION_SIZE = 400_000


@dataclass
class Envelope:
    """Decoded inscription envelope."""

    inscribe_to: bytes
    content_type: str
    body: bytes


def encode_envelope(
    inscribe_to: PublicKey,
    body: InscriptionBody,
    max_size: int = MAX_INSCRIPTION_SIZE,
) -> bytes:
    """Encode an inscription body into an envelope script.

    Args:
        inscribe_to: Key allowed to spend the reveal
        body: Inscription content and its MIME type
        max_size: Size cap for the body; clamped to MAX_INSCRIPTION_SIZE

    Returns:
        Envelope script bytes, used as the single tapscript leaf

    Raises:
        PayloadTooLarge: If the body exceeds the cap
        InvalidPayload: If the content type does not fit in one push
    """
    data = body.to_bytes()
    limit = min(max_size, MAX_INSCRIPTION_SIZE)
    if len(data) > limit:
        raise PayloadTooLarge(f"Inscription body is {len(data)} bytes, limit is {limit}")

    content_type = body.content_type.encode("utf-8")
    if len(content_type) > MAX_SCRIPT_ELEMENT_SIZE:
        raise InvalidPayload(
            f"Content type is {len(content_type)} bytes, limit is {MAX_SCRIPT_ELEMENT_SIZE}"
        )

    script = bytearray()
    script += encode_push(inscribe_to.x_only)
    script.append(OP_CHECKSIG)
    script.append(OP_FALSE)
    script.append(OP_IF)
    script += encode_push(PROTOCOL_ID)
    script += encode_push(CONTENT_TYPE_TAG)
    script += encode_push(content_type)
    script.append(OP_0)
    for start in range(0, len(data), MAX_SCRIPT_ELEMENT_SIZE):
        script += encode_push(data[start:start + MAX_SCRIPT_ELEMENT_SIZE])
    script.append(OP_ENDIF)
    return bytes(script)


def decode_envelope(script: bytes) -> Envelope:
    """Statically parse an envelope script the way an indexer reads it.

    Args:
        script: Reveal script bytes

    Returns:
        Decoded Envelope

    Raises:
        ValueError: If the script is not an inscription envelope
    """
    items = list(iter_script(script))
    if len(items) < 9:
        raise ValueError("Script too short for an inscription envelope")

    _, key = items[0]
    if key is None or len(key) != 32:
        raise ValueError("Envelope does not start with a 32-byte key push")
    if items[1] != (OP_CHECKSIG, None):
        raise ValueError("Envelope key is not followed by OP_CHECKSIG")
    if items[2] != (OP_FALSE, b"") or items[3] != (OP_IF, None):
        raise ValueError("Missing OP_FALSE OP_IF envelope header")
    if items[4][1] != PROTOCOL_ID:
        raise ValueError(f"Invalid protocol id: expected {PROTOCOL_ID!r}, got {items[4][1]!r}")
    if items[5][1] != CONTENT_TYPE_TAG:
        raise ValueError("Missing content type tag")
    if items[6][1] is None:
        raise ValueError("Content type is not a data push")
    if items[7] != (OP_0, b""):
        raise ValueError("Missing body separator")
    if items[-1] != (OP_ENDIF, None):
        raise ValueError("Envelope is not terminated by OP_ENDIF")

    chunks = items[8:-1]
    if any(data is None for _, data in chunks):
        raise ValueError("Envelope body contains a non-push opcode")

    return Envelope(
        inscribe_to=key,
        content_type=items[6][1].decode("utf-8"),
        body=b"".join(data for _, data in chunks),
    )
