"""Inscription body formats."""

from mcp_bitcoin_outputs.protocols.base import InscriptionBody
from mcp_bitcoin_outputs.protocols.brc20 import (
    BRC20_CONTENT_TYPE,
    BRC20Transfer,
    BRC20Protocol,
)
from mcp_bitcoin_outputs.protocols.ordinal import OrdinalContent

__all__ = [
    "InscriptionBody",
    "BRC20_CONTENT_TYPE",
    "BRC20Transfer",
    "BRC20Protocol",
    "OrdinalContent",
]
