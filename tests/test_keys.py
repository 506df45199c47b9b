"""Tests for public key parsing."""

import pytest

from mcp_bitcoin_outputs.errors import InvalidKeyEncoding, InvalidPayload
from mcp_bitcoin_outputs.keys import borrow_bytes, hash160, parse_public_key

from vectors import (
    G_COMPRESSED,
    G_COMPRESSED_HASH160,
    G_UNCOMPRESSED,
    G_UNCOMPRESSED_HASH160,
    G_X,
    OFF_CURVE_X,
)


class TestBorrowBytes:
    """Test the caller buffer adapter."""

    def test_copies_bytearray(self):
        """Result is an immutable copy, unaffected by later writes."""
        buffer = bytearray(b"abc")
        borrowed = borrow_bytes(buffer, "data")
        buffer[0] = 0x7A

        assert borrowed == b"abc"
        assert isinstance(borrowed, bytes)

    def test_accepts_memoryview(self):
        """Memoryviews are accepted."""
        assert borrow_bytes(memoryview(b"xyz"), "data") == b"xyz"

    def test_rejects_none(self):
        """A missing buffer raises the requested error."""
        with pytest.raises(InvalidPayload, match="payload is missing"):
            borrow_bytes(None, "payload")

    def test_rejects_text(self):
        """Text is not a byte buffer."""
        with pytest.raises(InvalidKeyEncoding, match="must be bytes"):
            borrow_bytes("02" + G_X, "public key", InvalidKeyEncoding)


class TestParsePublicKey:
    """Test key validation."""

    def test_parse_compressed(self):
        """Compressed key keeps its serialization."""
        key = parse_public_key(G_COMPRESSED)

        assert key.serialized == G_COMPRESSED
        assert key.compressed == G_COMPRESSED
        assert key.is_compressed
        assert key.x_only == bytes.fromhex(G_X)

    def test_parse_uncompressed(self):
        """Uncompressed key exposes its compressed form."""
        key = parse_public_key(G_UNCOMPRESSED)

        assert key.serialized == G_UNCOMPRESSED
        assert key.compressed == G_COMPRESSED
        assert not key.is_compressed
        assert key.x_only == bytes.fromhex(G_X)

    def test_parse_bytearray(self):
        """Mutable buffers are accepted."""
        key = parse_public_key(bytearray(G_COMPRESSED))
        assert key.serialized == G_COMPRESSED

    @pytest.mark.parametrize("data", [
        b"",
        bytes(32),
        bytes(33),
        bytes(65),
        G_COMPRESSED[:-1],
        G_COMPRESSED + b"\x00",
    ])
    def test_reject_bad_length_or_prefix(self, data):
        """Wrong lengths and all-zero keys are rejected."""
        with pytest.raises(InvalidKeyEncoding):
            parse_public_key(data)

    def test_reject_off_curve_compressed(self):
        """x coordinate without a curve point is rejected."""
        with pytest.raises(InvalidKeyEncoding, match="not on the secp256k1 curve"):
            parse_public_key(bytes.fromhex("02" + OFF_CURVE_X))

    def test_reject_off_curve_uncompressed(self):
        """Uncompressed point with the wrong y is rejected."""
        bad = bytearray(G_UNCOMPRESSED)
        bad[-1] ^= 0x01

        with pytest.raises(InvalidKeyEncoding):
            parse_public_key(bytes(bad))

    def test_reject_hybrid_prefix(self):
        """Hybrid 06/07 encodings are not accepted."""
        with pytest.raises(InvalidKeyEncoding, match="prefix"):
            parse_public_key(b"\x06" + G_UNCOMPRESSED[1:])

    def test_reject_none(self):
        """Missing key is an encoding error."""
        with pytest.raises(InvalidKeyEncoding):
            parse_public_key(None)


class TestHash160:
    """Test HASH160 against known keys."""

    def test_compressed_generator(self):
        assert hash160(G_COMPRESSED).hex() == G_COMPRESSED_HASH160

    def test_uncompressed_generator(self):
        assert hash160(G_UNCOMPRESSED).hex() == G_UNCOMPRESSED_HASH160
