"""Wire encoding of the legacy output record.

The record is serialized with the field numbering of the protocol buffers
message TW.Bitcoin.Proto.TransactionOutput, and must stay byte-compatible
with it::

    message TransactionOutput {
        int64 value = 1;
        bytes script = 2;
        bytes spendingScript = 5;
    }

Fields holding their proto3 default (0 or empty) are omitted.
"""

from mcp_bitcoin_outputs.errors import SerializationFailure
from mcp_bitcoin_outputs.record import INT64_MAX, INT64_MIN, LegacyOutputRecord


FIELD_VALUE = 1
FIELD_SCRIPT = 2
FIELD_SPENDING_SCRIPT = 5

WIRE_VARINT = 0
WIRE_FIXED64 = 1
WIRE_LENGTH_DELIMITED = 2
WIRE_FIXED32 = 5


def encode_varint(n: int) -> bytes:
    """Encode a non-negative integer as a base-128 varint."""
    out = bytearray()
    while True:
        byte = n & 0x7F
        n >>= 7
        if n:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def decode_varint(data: bytes, pos: int) -> tuple[int, int]:
    """Decode a varint at pos, returning (value, new position).

    Raises:
        ValueError: If the varint is truncated or longer than 10 bytes
    """
    result = 0
    shift = 0
    while True:
        if pos >= len(data):
            raise ValueError("Truncated varint")
        if shift >= 70:
            raise ValueError("Varint too long")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        shift += 7
        if not byte & 0x80:
            return result, pos


def _key(field: int, wire_type: int) -> bytes:
    return encode_varint((field << 3) | wire_type)


def encode_output_record(record: LegacyOutputRecord) -> bytes:
    """Serialize a record to its wire form.

    Raises:
        SerializationFailure: If the record does not have the expected shape
    """
    value = record.value
    if isinstance(value, bool) or not isinstance(value, int):
        raise SerializationFailure(f"Record value must be an integer, got {type(value).__name__}")
    if not INT64_MIN <= value <= INT64_MAX:
        raise SerializationFailure(f"Record value {value} is outside the int64 range")
    for name in ("script", "spending_script"):
        if not isinstance(getattr(record, name), bytes):
            raise SerializationFailure(f"Record {name} must be bytes")

    out = bytearray()
    if value:
        # Negative int64 values are sent as their 64-bit two's complement.
        out += _key(FIELD_VALUE, WIRE_VARINT) + encode_varint(value & 0xFFFFFFFFFFFFFFFF)
    if record.script:
        out += _key(FIELD_SCRIPT, WIRE_LENGTH_DELIMITED)
        out += encode_varint(len(record.script)) + record.script
    if record.spending_script:
        out += _key(FIELD_SPENDING_SCRIPT, WIRE_LENGTH_DELIMITED)
        out += encode_varint(len(record.spending_script)) + record.spending_script
    return bytes(out)


def decode_output_record(data: bytes) -> LegacyOutputRecord:
    """Parse a wire-encoded record. Unknown fields are skipped.

    Raises:
        ValueError: If the data is malformed
    """
    value = 0
    script = b""
    spending_script = b""

    pos = 0
    while pos < len(data):
        key, pos = decode_varint(data, pos)
        field, wire_type = key >> 3, key & 0x07

        if wire_type == WIRE_VARINT:
            raw, pos = decode_varint(data, pos)
            if field == FIELD_VALUE:
                raw &= 0xFFFFFFFFFFFFFFFF
                value = raw - 2**64 if raw > INT64_MAX else raw
        elif wire_type == WIRE_LENGTH_DELIMITED:
            length, pos = decode_varint(data, pos)
            if pos + length > len(data):
                raise ValueError(f"Field {field} truncated: expected {length} bytes, got {len(data) - pos}")
            chunk = data[pos:pos + length]
            pos += length
            if field == FIELD_SCRIPT:
                script = chunk
            elif field == FIELD_SPENDING_SCRIPT:
                spending_script = chunk
        elif wire_type == WIRE_FIXED64:
            pos += 8
        elif wire_type == WIRE_FIXED32:
            pos += 4
        else:
            raise ValueError(f"Unsupported wire type {wire_type} for field {field}")

        if pos > len(data):
            raise ValueError(f"Field {field} truncated")

    return LegacyOutputRecord(value=value, script=script, spending_script=spending_script)
