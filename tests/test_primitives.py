"""Tests for script push primitives."""

import pytest
from mcp_bitcoin_outputs.primitives import (
    encode_push,
    iter_script,
    OP_0,
    OP_CHECKSIG,
    OP_DUP,
    OP_PUSHDATA1,
    OP_PUSHDATA2,
    OP_PUSHDATA4,
)


class TestPushEncoding:
    """Test data push encoding."""

    def test_encode_empty(self):
        """Empty push is OP_0."""
        assert encode_push(b"") == bytes([OP_0])

    def test_encode_small_data(self):
        """Encode small data (< 76 bytes) directly."""
        data = b"hello"
        push = encode_push(data)

        assert push[0] == len(data)
        assert push[1:] == data

    def test_encode_75_bytes_direct(self):
        """75 bytes is the largest direct push."""
        push = encode_push(b"x" * 75)
        assert push[0] == 75

    def test_encode_medium_data(self):
        """Encode medium data (76-255 bytes) with PUSHDATA1."""
        data = b"x" * 100
        push = encode_push(data)

        assert push[0] == OP_PUSHDATA1
        assert push[1] == len(data)
        assert push[2:] == data

    def test_encode_large_data(self):
        """Encode 520 bytes with PUSHDATA2."""
        data = b"x" * 520
        push = encode_push(data)

        assert push[0] == OP_PUSHDATA2
        # Little-endian length
        assert int.from_bytes(push[1:3], 'little') == len(data)
        assert push[3:] == data

    def test_encode_pushdata4(self):
        """Encode data > 65535 bytes with PUSHDATA4."""
        data = b"x" * 65536
        push = encode_push(data)

        assert push[0] == OP_PUSHDATA4
        assert int.from_bytes(push[1:5], 'little') == 65536


class TestIterScript:
    """Test script parsing."""

    def test_mixed_script(self):
        """Opcodes and pushes are yielded in order."""
        script = bytes([OP_DUP]) + encode_push(b"ab") + bytes([OP_0, OP_CHECKSIG])

        assert list(iter_script(script)) == [
            (OP_DUP, None),
            (2, b"ab"),
            (OP_0, b""),
            (OP_CHECKSIG, None),
        ]

    @pytest.mark.parametrize("size", [1, 75, 76, 255, 256, 520])
    def test_push_sizes(self, size):
        """Every push form parses back to its data."""
        data = bytes(range(256)) * 3
        data = data[:size]

        [(_, parsed)] = list(iter_script(encode_push(data)))
        assert parsed == data

    def test_empty_script(self):
        """Empty script yields nothing."""
        assert list(iter_script(b"")) == []


class TestMalformedScripts:
    """Test handling of malformed scripts."""

    def test_truncated_pushdata1_no_length(self):
        """PUSHDATA1 with no length byte should raise ValueError."""
        with pytest.raises(ValueError, match="Truncated PUSHDATA1"):
            list(iter_script(bytes([OP_PUSHDATA1])))

    def test_truncated_pushdata2_partial_length(self):
        """PUSHDATA2 with only 1 length byte should raise ValueError."""
        with pytest.raises(ValueError, match="Truncated PUSHDATA2"):
            list(iter_script(bytes([OP_PUSHDATA2, 0x00])))

    def test_truncated_pushdata4_partial_length(self):
        """PUSHDATA4 with only 2 length bytes should raise ValueError."""
        with pytest.raises(ValueError, match="Truncated PUSHDATA4"):
            list(iter_script(bytes([OP_PUSHDATA4, 0x00, 0x00])))

    def test_truncated_data_direct_push(self):
        """Direct push with declared length > actual data should raise ValueError."""
        script = bytes([10]) + b"abc"

        with pytest.raises(ValueError, match="Script truncated.*expected 10 bytes.*got 3"):
            list(iter_script(script))

    def test_truncated_data_pushdata2(self):
        """PUSHDATA2 with declared length > actual data should raise ValueError."""
        length_bytes = (1000).to_bytes(2, 'little')
        script = bytes([OP_PUSHDATA2]) + length_bytes + b"0123456789"

        with pytest.raises(ValueError, match="Script truncated.*expected 1000 bytes.*got 10"):
            list(iter_script(script))
