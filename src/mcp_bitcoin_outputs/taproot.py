"""BIP341 Taproot output key derivation.

Implements tagged hashing, single-leaf commitments and the output key tweak
``Q = P + H_TapTweak(P || merkle_root) * G`` for both key-path-only outputs
and outputs that commit to one script leaf.

Reference:
    BIP340: https://github.com/bitcoin/bips/blob/master/bip-0340.mediawiki
    BIP341: https://github.com/bitcoin/bips/blob/master/bip-0341.mediawiki
"""

import hashlib
from dataclasses import dataclass
from typing import Optional

from coincurve import PublicKey as CoinCurvePublicKey

from mcp_bitcoin_outputs.errors import InvalidKeyEncoding
from mcp_bitcoin_outputs.keys import PublicKey
from mcp_bitcoin_outputs.primitives import OP_1, encode_push


TAPSCRIPT_LEAF_VERSION = 0xC0


def tagged_hash(tag: str, data: bytes) -> bytes:
    """Compute BIP340 tagged hash: SHA256(SHA256(tag) || SHA256(tag) || data)."""
    tag_hash = hashlib.sha256(tag.encode()).digest()
    return hashlib.sha256(tag_hash + tag_hash + data).digest()


def ser_compact_size(n: int) -> bytes:
    """Serialize an integer as a Bitcoin compact size."""
    if n < 253:
        return bytes([n])
    elif n <= 0xFFFF:
        return b'\xfd' + n.to_bytes(2, 'little')
    elif n <= 0xFFFFFFFF:
        return b'\xfe' + n.to_bytes(4, 'little')
    else:
        return b'\xff' + n.to_bytes(8, 'little')


def tap_leaf_hash(leaf_script: bytes, leaf_version: int = TAPSCRIPT_LEAF_VERSION) -> bytes:
    """Compute the TapLeaf hash of a single script leaf."""
    return tagged_hash(
        "TapLeaf",
        bytes([leaf_version]) + ser_compact_size(len(leaf_script)) + leaf_script,
    )


@dataclass(frozen=True)
class TaprootOutput:
    """Tweaked Taproot output key and the data it commits to."""

    internal_key: bytes
    merkle_root: Optional[bytes]
    output_key: bytes
    parity: int

    @property
    def script_pubkey(self) -> bytes:
        """P2TR scriptPubKey: OP_1 <32-byte output key>."""
        return bytes([OP_1]) + encode_push(self.output_key)

    def control_block(self, leaf_version: int = TAPSCRIPT_LEAF_VERSION) -> bytes:
        """Control block for spending the single committed leaf."""
        if self.merkle_root is None:
            raise ValueError("Key-path-only output has no script leaf to spend")
        return bytes([leaf_version | self.parity]) + self.internal_key


def taproot_tweak(public_key: PublicKey, merkle_root: Optional[bytes] = None) -> TaprootOutput:
    """Derive the Taproot output key for an internal key.

    The internal key is the even-y point with the x coordinate of
    ``public_key``, so both parities of the same key give the same output.

    Args:
        public_key: Internal key
        merkle_root: 32-byte script tree root, or None for key-path only

    Returns:
        TaprootOutput with the x-only output key and its parity

    Raises:
        InvalidKeyEncoding: If the tweak is out of range or cancels the key
    """
    if merkle_root is not None and len(merkle_root) != 32:
        raise ValueError(f"Merkle root must be 32 bytes, got {len(merkle_root)}")

    internal_key = public_key.x_only
    tweak = tagged_hash("TapTweak", internal_key + (merkle_root or b""))

    try:
        internal_point = CoinCurvePublicKey(b'\x02' + internal_key)
        tweaked = internal_point.add(tweak).format(compressed=True)
    except ValueError as e:
        raise InvalidKeyEncoding(f"Failed to tweak public key: {e}") from e

    return TaprootOutput(
        internal_key=internal_key,
        merkle_root=merkle_root,
        output_key=tweaked[1:],
        parity=tweaked[0] & 1,
    )


def taproot_tweak_script(public_key: PublicKey, leaf_script: bytes) -> TaprootOutput:
    """Derive the output key for a tree holding a single tapscript leaf.

    For one leaf the merkle root is the leaf hash itself.
    """
    return taproot_tweak(public_key, tap_leaf_hash(leaf_script))
