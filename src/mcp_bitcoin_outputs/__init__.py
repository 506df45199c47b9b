"""Bitcoin output script builders with an MCP server front end."""

__version__ = "0.1.0"

# Server entry points
from mcp_bitcoin_outputs.server import create_server, main

# Configuration
from mcp_bitcoin_outputs.config import Config, load_config

# Errors
from mcp_bitcoin_outputs.errors import (
    OutputScriptError,
    InvalidKeyEncoding,
    InvalidPayload,
    PayloadTooLarge,
    ValueOverflow,
    SerializationFailure,
)

# Output intents and builders
from mcp_bitcoin_outputs.intents import (
    OutputIntent,
    P2PKH,
    P2WPKH,
    P2TRKeyPath,
    BRC20Inscription,
    OrdinalInscription,
)
from mcp_bitcoin_outputs.keys import PublicKey, parse_public_key
from mcp_bitcoin_outputs.builders import ScriptBuildResult, build_output

# Envelope encoding/decoding
from mcp_bitcoin_outputs.envelope import Envelope, encode_envelope, decode_envelope

# Legacy record
from mcp_bitcoin_outputs.record import LegacyOutputRecord, pack_output
from mcp_bitcoin_outputs.wire import encode_output_record, decode_output_record
from mcp_bitcoin_outputs.legacy import (
    build_p2pkh_script,
    build_p2wpkh_script,
    build_p2tr_key_path_script,
    build_brc20_transfer_inscription,
    build_nft_inscription,
)

__all__ = [
    # Version
    "__version__",
    # Server
    "create_server",
    "main",
    # Config
    "Config",
    "load_config",
    # Errors
    "OutputScriptError",
    "InvalidKeyEncoding",
    "InvalidPayload",
    "PayloadTooLarge",
    "ValueOverflow",
    "SerializationFailure",
    # Intents and builders
    "OutputIntent",
    "P2PKH",
    "P2WPKH",
    "P2TRKeyPath",
    "BRC20Inscription",
    "OrdinalInscription",
    "PublicKey",
    "parse_public_key",
    "ScriptBuildResult",
    "build_output",
    # Envelope
    "Envelope",
    "encode_envelope",
    "decode_envelope",
    # Legacy record
    "LegacyOutputRecord",
    "pack_output",
    "encode_output_record",
    "decode_output_record",
    "build_p2pkh_script",
    "build_p2wpkh_script",
    "build_p2tr_key_path_script",
    "build_brc20_transfer_inscription",
    "build_nft_inscription",
]
