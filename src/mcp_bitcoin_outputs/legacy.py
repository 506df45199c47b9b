"""Entry points returning serialized legacy output records.

Each function validates its inputs, builds one kind of output and returns the
wire-encoded record, or None when the input is rejected. Only
SerializationFailure escapes, since it means a valid record could not be
encoded.
"""

import logging
from typing import Optional, Union

from mcp_bitcoin_outputs.builders import build_output
from mcp_bitcoin_outputs.envelope import MAX_INSCRIPTION_SIZE
from mcp_bitcoin_outputs.errors import INPUT_ERRORS, ValueOverflow
from mcp_bitcoin_outputs.intents import (
    BRC20Inscription,
    OrdinalInscription,
    OutputIntent,
    P2PKH,
    P2TRKeyPath,
    P2WPKH,
)
from mcp_bitcoin_outputs.keys import BytesLike, borrow_bytes, parse_public_key
from mcp_bitcoin_outputs.record import INT64_MAX, pack_output
from mcp_bitcoin_outputs.wire import encode_output_record

logger = logging.getLogger(__name__)


def _check_satoshis(satoshis: int) -> int:
    if isinstance(satoshis, bool) or not isinstance(satoshis, int):
        raise ValueOverflow(f"Satoshis must be an integer, got {type(satoshis).__name__}")
    if not 0 <= satoshis <= INT64_MAX:
        raise ValueOverflow(f"Satoshis {satoshis} is outside 0..{INT64_MAX}")
    return satoshis


def build_output_record(
    intent: OutputIntent,
    satoshis: int,
    pubkey: BytesLike,
    max_inscription_size: int = MAX_INSCRIPTION_SIZE,
) -> Optional[bytes]:
    """Build any intent and return the serialized record, or None on bad input."""
    try:
        value = _check_satoshis(satoshis)
        recipient = parse_public_key(pubkey)
        result = build_output(intent, recipient, value, max_inscription_size)
        record = pack_output(result)
    except INPUT_ERRORS as e:
        logger.info("Rejected %s output: %s: %s", type(intent).__name__, type(e).__name__, e)
        return None

    return encode_output_record(record)


def build_p2pkh_script(satoshis: int, pubkey: BytesLike) -> Optional[bytes]:
    """Build a P2PKH output record."""
    return build_output_record(P2PKH(), satoshis, pubkey)


def build_p2wpkh_script(satoshis: int, pubkey: BytesLike) -> Optional[bytes]:
    """Build a P2WPKH output record."""
    return build_output_record(P2WPKH(), satoshis, pubkey)


def build_p2tr_key_path_script(satoshis: int, pubkey: BytesLike) -> Optional[bytes]:
    """Build a key-path-only P2TR output record."""
    return build_output_record(P2TRKeyPath(), satoshis, pubkey)


def build_brc20_transfer_inscription(
    ticker: Union[str, bytes],
    amount: int,
    satoshis: int,
    pubkey: BytesLike,
    max_inscription_size: int = MAX_INSCRIPTION_SIZE,
) -> Optional[bytes]:
    """Build a BRC-20 transfer inscription output record.

    Args:
        ticker: 4-byte token ticker
        amount: Token amount to transfer
        satoshis: Output amount
        pubkey: Recipient key, also the reveal script's spending key
        max_inscription_size: Body size cap

    Returns:
        Serialized record whose spending script is the reveal script, or None
    """
    intent = BRC20Inscription(tick=ticker, amount=amount)
    return build_output_record(intent, satoshis, pubkey, max_inscription_size)


def build_nft_inscription(
    mime_type: Union[str, bytes],
    payload: BytesLike,
    satoshis: int,
    pubkey: BytesLike,
    max_inscription_size: int = MAX_INSCRIPTION_SIZE,
) -> Optional[bytes]:
    """Build an arbitrary-content inscription output record.

    Args:
        mime_type: Content type, e.g. "image/png"
        payload: Content bytes
        satoshis: Output amount
        pubkey: Recipient key, also the reveal script's spending key
        max_inscription_size: Body size cap

    Returns:
        Serialized record whose spending script is the reveal script, or None
    """
    try:
        content = borrow_bytes(payload, "payload")
    except INPUT_ERRORS as e:
        logger.info("Rejected OrdinalInscription output: %s", e)
        return None

    intent = OrdinalInscription(mime_type=mime_type, payload=content)
    return build_output_record(intent, satoshis, pubkey, max_inscription_size)
