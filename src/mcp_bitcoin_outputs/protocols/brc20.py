"""BRC-20 token transfer inscriptions.

BRC-20 is a token standard using JSON inscriptions. A transfer inscription
moves an inscribed balance to whoever receives the inscribed output.

Reference: https://domo-2.gitbook.io/brc-20-experiment/
"""

import json
from dataclasses import dataclass
from typing import Union

from mcp_bitcoin_outputs.errors import InvalidPayload
from mcp_bitcoin_outputs.protocols.base import InscriptionBody


BRC20_CONTENT_TYPE = "text/plain;charset=utf-8"
TICKER_SIZE = 4
MAX_AMOUNT = 2**64 - 1


def _normalize_tick(tick: Union[str, bytes]) -> str:
    if isinstance(tick, (bytes, bytearray)):
        try:
            tick = bytes(tick).decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidPayload(f"Tick is not valid UTF-8: {e}") from e
    if not isinstance(tick, str):
        raise InvalidPayload(f"Tick must be text, got {type(tick).__name__}")
    if "\x00" in tick:
        raise InvalidPayload("Tick must not contain NUL characters")
    try:
        size = len(tick.encode("utf-8"))
    except UnicodeEncodeError as e:
        raise InvalidPayload(f"Tick is not encodable as UTF-8: {e}") from e
    if size != TICKER_SIZE:
        raise InvalidPayload(f"Tick must be exactly {TICKER_SIZE} bytes, got {size}")
    return tick


@dataclass
class BRC20Transfer(InscriptionBody):
    """BRC-20 transfer operation."""

    tick: str
    amount: int
    content_type: str = BRC20_CONTENT_TYPE

    def __post_init__(self):
        self.tick = _normalize_tick(self.tick)
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise InvalidPayload(f"Amount must be an integer, got {type(self.amount).__name__}")
        if not 0 <= self.amount <= MAX_AMOUNT:
            raise InvalidPayload(f"Amount must be between 0 and {MAX_AMOUNT}, got {self.amount}")

    def to_json(self) -> str:
        """Convert to BRC-20 JSON format."""
        return json.dumps({
            "p": "brc-20",
            "op": "transfer",
            "tick": self.tick,
            "amt": str(self.amount),
        }, separators=(',', ':'), ensure_ascii=False)

    def to_bytes(self) -> bytes:
        return self.to_json().encode('utf-8')


class BRC20Protocol:
    """BRC-20 protocol parser."""

    @staticmethod
    def parse(json_str: Union[str, bytes]) -> BRC20Transfer:
        """Parse BRC-20 transfer JSON into an operation object.

        Args:
            json_str: BRC-20 JSON string or UTF-8 bytes

        Returns:
            BRC20Transfer

        Raises:
            ValueError: If not valid BRC-20 transfer JSON
        """
        data = json.loads(json_str)
        if not isinstance(data, dict):
            raise ValueError("BRC-20 inscription must be a JSON object")

        if data.get("p") != "brc-20":
            raise ValueError(f"Not a BRC-20 inscription: p={data.get('p')}")

        op = data.get("op")
        if op != "transfer":
            raise ValueError(f"Unsupported BRC-20 operation: {op}")

        # Amounts are decimal strings; JSON numbers, booleans and null are not.
        amt = data.get("amt")
        if not isinstance(amt, str) or not (amt.isascii() and amt.isdigit()):
            raise ValueError(f"BRC-20 amount must be a decimal string, got {amt!r}")

        try:
            return BRC20Transfer(
                tick=data.get("tick", ""),
                amount=int(amt),
            )
        except InvalidPayload as e:
            raise ValueError(str(e)) from e
