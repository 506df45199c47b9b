"""Public key parsing and hashing.

This is the only place where caller-supplied key bytes are trusted: every
builder receives a ``PublicKey`` that has already been validated against the
secp256k1 curve.
"""

import hashlib
from dataclasses import dataclass
from typing import Type, Union

from coincurve import PublicKey as CoinCurvePublicKey
from Crypto.Hash import RIPEMD160

from mcp_bitcoin_outputs.errors import InvalidKeyEncoding, InvalidPayload, OutputScriptError


COMPRESSED_KEY_SIZE = 33
UNCOMPRESSED_KEY_SIZE = 65

BytesLike = Union[bytes, bytearray, memoryview]


def borrow_bytes(
    buffer: BytesLike,
    what: str,
    error: Type[OutputScriptError] = InvalidPayload,
) -> bytes:
    """Copy a caller-owned byte buffer into an immutable bytes object.

    The returned copy is all that downstream code sees, so the caller's
    buffer is never retained past the call.

    Args:
        buffer: bytes, bytearray or memoryview supplied by the caller
        what: Name of the argument, used in error messages
        error: Exception type raised on a missing or non-bytes buffer

    Returns:
        Immutable copy of the buffer contents
    """
    if buffer is None:
        raise error(f"{what} is missing")
    if not isinstance(buffer, (bytes, bytearray, memoryview)):
        raise error(f"{what} must be bytes, got {type(buffer).__name__}")
    return bytes(buffer)


def hash160(data: bytes) -> bytes:
    """Compute HASH160 (RIPEMD160(SHA256(data)))."""
    sha256_hash = hashlib.sha256(data).digest()
    return RIPEMD160.new(sha256_hash).digest()


@dataclass(frozen=True)
class PublicKey:
    """Validated secp256k1 public key."""

    serialized: bytes
    compressed: bytes

    @property
    def is_compressed(self) -> bool:
        return len(self.serialized) == COMPRESSED_KEY_SIZE

    @property
    def x_only(self) -> bytes:
        """32-byte x coordinate used by Taproot."""
        return self.compressed[1:]

    @property
    def hex(self) -> str:
        return self.serialized.hex()


def parse_public_key(data: BytesLike) -> PublicKey:
    """Parse a compressed or uncompressed public key.

    Args:
        data: 33-byte (02/03 prefix) or 65-byte (04 prefix) encoding

    Returns:
        Validated PublicKey, keeping the serialization as supplied

    Raises:
        InvalidKeyEncoding: On wrong length, bad prefix or a point off the curve
    """
    raw = borrow_bytes(data, "public key", InvalidKeyEncoding)

    if len(raw) == COMPRESSED_KEY_SIZE:
        if raw[0] not in (0x02, 0x03):
            raise InvalidKeyEncoding(f"Invalid compressed key prefix: {raw[0]:#04x}")
    elif len(raw) == UNCOMPRESSED_KEY_SIZE:
        # libsecp256k1 also accepts hybrid 06/07 keys; those are not standard.
        if raw[0] != 0x04:
            raise InvalidKeyEncoding(f"Invalid uncompressed key prefix: {raw[0]:#04x}")
    else:
        raise InvalidKeyEncoding(f"Public key must be 33 or 65 bytes, got {len(raw)}")

    try:
        point = CoinCurvePublicKey(raw)
    except (ValueError, TypeError) as e:
        raise InvalidKeyEncoding(f"Public key is not on the secp256k1 curve: {e}") from e

    return PublicKey(serialized=raw, compressed=point.format(compressed=True))
