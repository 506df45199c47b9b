"""MCP server for building Bitcoin output scripts.

This server exposes tools that build P2PKH, P2WPKH, P2TR and Ordinals
inscription outputs for a recipient key, returning both the legacy record
encoding and the individual scripts as hex.
"""

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from mcp_bitcoin_outputs.builders import build_output
from mcp_bitcoin_outputs.config import Config, find_config
from mcp_bitcoin_outputs.envelope import decode_envelope
from mcp_bitcoin_outputs.errors import INPUT_ERRORS
from mcp_bitcoin_outputs.intents import (
    BRC20Inscription,
    OrdinalInscription,
    OutputIntent,
    P2PKH,
    P2TRKeyPath,
    P2WPKH,
)
from mcp_bitcoin_outputs.keys import parse_public_key
from mcp_bitcoin_outputs.protocols.brc20 import BRC20_CONTENT_TYPE, BRC20Protocol
from mcp_bitcoin_outputs.record import pack_output
from mcp_bitcoin_outputs.wire import decode_output_record as decode_record_bytes
from mcp_bitcoin_outputs.wire import encode_output_record

logger = logging.getLogger(__name__)


def _decode_hex(value: str, what: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise ValueError(f"Invalid {what} hex: {e}") from e


def create_server(config: Optional[Config] = None) -> FastMCP:
    """Create and configure the MCP server with all tools.

    Args:
        config: Optional configuration. If not provided, uses defaults.

    Returns:
        Configured FastMCP server instance.
    """
    if config is None:
        config = Config()

    mcp = FastMCP("mcp-bitcoin-outputs")

    # Store config on server for access by tools
    mcp._config = config

    def build(intent: OutputIntent, pubkey_hex: str, satoshis: int) -> dict:
        """Build an output and describe it, or report why it was rejected."""
        try:
            pubkey = parse_public_key(_decode_hex(pubkey_hex, "public key"))
            result = build_output(intent, pubkey, satoshis, config.max_inscription_size)
            record = pack_output(result)
        except INPUT_ERRORS as e:
            logger.info("Rejected %s output: %s", type(intent).__name__, e)
            return {"error": str(e), "error_type": type(e).__name__}
        except ValueError as e:
            return {"error": str(e), "error_type": "InvalidHex"}

        return {
            "value": record.value,
            "script_hex": record.script.hex(),
            "spending_script_hex": record.spending_script.hex(),
            "record_hex": encode_output_record(record).hex(),
        }

    # =========================================================================
    # Base Outputs
    # =========================================================================

    @mcp.tool()
    def build_p2pkh_output(pubkey_hex: str, satoshis: int) -> dict:
        """Build a pay-to-public-key-hash output.

        Args:
            pubkey_hex: Compressed or uncompressed public key as hex
            satoshis: Output amount in satoshis

        Returns:
            Dictionary with 'record_hex', 'script_hex', 'spending_script_hex'
            and 'value', or 'error' if the input was rejected.
        """
        return build(P2PKH(), pubkey_hex, satoshis)

    @mcp.tool()
    def build_p2wpkh_output(pubkey_hex: str, satoshis: int) -> dict:
        """Build a pay-to-witness-public-key-hash (segwit v0) output.

        Args:
            pubkey_hex: Compressed public key as hex
            satoshis: Output amount in satoshis

        Returns:
            Dictionary with the record and scripts as hex, or 'error'.
        """
        return build(P2WPKH(), pubkey_hex, satoshis)

    @mcp.tool()
    def build_p2tr_key_path_output(pubkey_hex: str, satoshis: int) -> dict:
        """Build a key-path-only pay-to-taproot output.

        Args:
            pubkey_hex: Internal public key as hex
            satoshis: Output amount in satoshis

        Returns:
            Dictionary with the record and scripts as hex, or 'error'.
        """
        return build(P2TRKeyPath(), pubkey_hex, satoshis)

    # =========================================================================
    # Inscriptions
    # =========================================================================

    @mcp.tool()
    def build_brc20_transfer_output(
        tick: str,
        amount: int,
        pubkey_hex: str,
        satoshis: int = 0,
    ) -> dict:
        """Build a Taproot output committing to a BRC-20 transfer inscription.

        Args:
            tick: Token ticker (exactly 4 bytes)
            amount: Token amount to transfer
            pubkey_hex: Recipient public key as hex
            satoshis: Output amount in satoshis (default: 0)

        Returns:
            Dictionary with the record and scripts as hex. The spending
            script is the reveal script needed to inscribe.
        """
        return build(BRC20Inscription(tick=tick, amount=amount), pubkey_hex, satoshis)

    @mcp.tool()
    def build_nft_inscription_output(
        mime_type: str,
        payload: str,
        pubkey_hex: str,
        satoshis: int = 0,
        encoding: str = "hex",
    ) -> dict:
        """Build a Taproot output committing to an arbitrary-content inscription.

        Args:
            mime_type: Content type, e.g. 'image/png'
            payload: Content to inscribe
            pubkey_hex: Recipient public key as hex
            satoshis: Output amount in satoshis (default: 0)
            encoding: Payload encoding ('hex' or 'utf-8'). Default: 'hex'

        Returns:
            Dictionary with the record and scripts as hex, or 'error'.
        """
        if encoding == "hex":
            try:
                payload_bytes = _decode_hex(payload, "payload")
            except ValueError as e:
                return {"error": str(e), "error_type": "InvalidHex"}
        else:
            payload_bytes = payload.encode(encoding)

        intent = OrdinalInscription(mime_type=mime_type, payload=payload_bytes)
        return build(intent, pubkey_hex, satoshis)

    # =========================================================================
    # Inspection
    # =========================================================================

    @mcp.tool()
    def decode_output_record(record_hex: str) -> dict:
        """Parse a serialized legacy output record.

        Args:
            record_hex: Wire-encoded record as hex

        Returns:
            Dictionary with 'value', 'script_hex' and 'spending_script_hex'.
        """
        try:
            record = decode_record_bytes(_decode_hex(record_hex, "record"))
        except ValueError as e:
            return {"error": str(e)}

        return {
            "value": record.value,
            "script_hex": record.script.hex(),
            "spending_script_hex": record.spending_script.hex(),
        }

    @mcp.tool()
    def parse_inscription(spending_script_hex: str) -> dict:
        """Parse an inscription envelope from a reveal script.

        Args:
            spending_script_hex: Reveal script as hex

        Returns:
            Dictionary with the inscribed key, content type and body. BRC-20
            transfers also include the parsed 'brc20' operation.
        """
        try:
            envelope = decode_envelope(_decode_hex(spending_script_hex, "script"))
        except ValueError as e:
            return {"error": str(e)}

        result = {
            "inscribe_to": envelope.inscribe_to.hex(),
            "content_type": envelope.content_type,
            "body_hex": envelope.body.hex(),
            "body_size": len(envelope.body),
        }

        try:
            result["body_utf8"] = envelope.body.decode("utf-8")
        except UnicodeDecodeError:
            result["body_utf8"] = None

        if envelope.content_type == BRC20_CONTENT_TYPE and result["body_utf8"]:
            try:
                transfer = BRC20Protocol.parse(result["body_utf8"])
            except ValueError:
                # Plain text inscriptions share the BRC-20 content type.
                result["brc20"] = None
            else:
                result["brc20"] = {
                    "operation": "transfer",
                    "tick": transfer.tick,
                    "amount": transfer.amount,
                }

        return result

    return mcp


def main():
    """Entry point for the MCP server."""
    config = find_config()
    logging.basicConfig(level=config.log_level)

    server = create_server(config)
    server.run()


if __name__ == "__main__":
    main()
