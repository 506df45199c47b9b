"""Script builders for each output intent.

Each builder turns a validated recipient key into the output's scriptPubkey.
Inscription builders also return the envelope script committed to by the
Taproot output key; that script is needed later to reveal the inscription.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from mcp_bitcoin_outputs.envelope import MAX_INSCRIPTION_SIZE, encode_envelope
from mcp_bitcoin_outputs.errors import InvalidKeyEncoding, ValueOverflow
from mcp_bitcoin_outputs.intents import (
    BRC20Inscription,
    OrdinalInscription,
    OutputIntent,
    P2PKH,
    P2TRKeyPath,
    P2WPKH,
)
from mcp_bitcoin_outputs.keys import PublicKey, hash160
from mcp_bitcoin_outputs.primitives import (
    OP_0,
    OP_CHECKSIG,
    OP_DUP,
    OP_EQUALVERIFY,
    OP_HASH160,
    encode_push,
)
from mcp_bitcoin_outputs.protocols import BRC20Transfer, InscriptionBody, OrdinalContent
from mcp_bitcoin_outputs.taproot import TaprootOutput, taproot_tweak, taproot_tweak_script

logger = logging.getLogger(__name__)

MAX_OUTPUT_VALUE = 2**64 - 1


@dataclass(frozen=True)
class ScriptBuildResult:
    """Built output: amount, locking script and optional reveal script."""

    value: int
    script_pubkey: bytes
    taproot_reveal_script: Optional[bytes] = None


def p2pkh_script(public_key: PublicKey) -> bytes:
    """OP_DUP OP_HASH160 <hash160(pubkey)> OP_EQUALVERIFY OP_CHECKSIG.

    Commits to the key serialization as supplied, so compressed and
    uncompressed forms of one key give different scripts.
    """
    return (
        bytes([OP_DUP, OP_HASH160])
        + encode_push(hash160(public_key.serialized))
        + bytes([OP_EQUALVERIFY, OP_CHECKSIG])
    )


def p2wpkh_script(public_key: PublicKey) -> bytes:
    """OP_0 <hash160(pubkey)>.

    Segwit v0 key hashes are only defined for compressed keys (BIP143).

    Raises:
        InvalidKeyEncoding: If the key was supplied uncompressed
    """
    if not public_key.is_compressed:
        raise InvalidKeyEncoding("P2WPKH requires a compressed public key")
    return bytes([OP_0]) + encode_push(hash160(public_key.serialized))


def p2tr_key_path_output(public_key: PublicKey) -> TaprootOutput:
    """Taproot output with no script tree."""
    return taproot_tweak(public_key)


def inscription_output(
    public_key: PublicKey,
    body: InscriptionBody,
    max_inscription_size: int = MAX_INSCRIPTION_SIZE,
) -> tuple[TaprootOutput, bytes]:
    """Taproot output committing to an inscription envelope.

    Returns:
        (output, reveal script); the reveal script is the single leaf
    """
    reveal_script = encode_envelope(public_key, body, max_inscription_size)
    return taproot_tweak_script(public_key, reveal_script), reveal_script


def _check_value(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueOverflow(f"Value must be an integer, got {type(value).__name__}")
    if not 0 <= value <= MAX_OUTPUT_VALUE:
        raise ValueOverflow(f"Value {value} is outside 0..{MAX_OUTPUT_VALUE}")
    return value


def build_output(
    intent: OutputIntent,
    public_key: PublicKey,
    value: int,
    max_inscription_size: int = MAX_INSCRIPTION_SIZE,
) -> ScriptBuildResult:
    """Build the output described by an intent.

    Args:
        intent: Which kind of output to build
        public_key: Validated recipient key
        value: Output amount in satoshis
        max_inscription_size: Body size cap for inscription intents

    Returns:
        ScriptBuildResult; taproot_reveal_script is set only for inscriptions

    Raises:
        ValueOverflow: If value is negative or wider than 64 bits
        InvalidPayload: If the inscription fields cannot be encoded
        PayloadTooLarge: If the inscription body exceeds the cap
    """
    value = _check_value(value)

    if isinstance(intent, P2PKH):
        return ScriptBuildResult(value=value, script_pubkey=p2pkh_script(public_key))

    if isinstance(intent, P2WPKH):
        return ScriptBuildResult(value=value, script_pubkey=p2wpkh_script(public_key))

    if isinstance(intent, P2TRKeyPath):
        output = p2tr_key_path_output(public_key)
        return ScriptBuildResult(value=value, script_pubkey=output.script_pubkey)

    if isinstance(intent, BRC20Inscription):
        body: InscriptionBody = BRC20Transfer(tick=intent.tick, amount=intent.amount)
    elif isinstance(intent, OrdinalInscription):
        body = OrdinalContent(content_type=intent.mime_type, payload=intent.payload)
    else:
        raise TypeError(f"Unknown output intent: {type(intent).__name__}")

    output, reveal_script = inscription_output(public_key, body, max_inscription_size)
    logger.debug(
        "Inscription %s (%d bytes) committed to output key %s",
        body.content_type,
        len(body.to_bytes()),
        output.output_key.hex(),
    )
    return ScriptBuildResult(
        value=value,
        script_pubkey=output.script_pubkey,
        taproot_reveal_script=reveal_script,
    )
