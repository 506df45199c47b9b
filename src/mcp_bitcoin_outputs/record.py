"""Legacy output record packaging.

Older callers consume outputs as a flat ``{value, script, spendingScript}``
record. This shape is a compatibility contract, so richer build results are
mapped into it here rather than changing the record.
"""

from dataclasses import dataclass
from typing import Optional

from mcp_bitcoin_outputs.builders import ScriptBuildResult
from mcp_bitcoin_outputs.errors import ValueOverflow


INT64_MIN = -2**63
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class LegacyOutputRecord:
    """Flat transaction output record."""

    value: int
    script: bytes
    spending_script: bytes = b""


def pack_output(result: ScriptBuildResult, value: Optional[int] = None) -> LegacyOutputRecord:
    """Map a build result into the legacy record.

    Args:
        result: Output built by build_output
        value: Amount to record; defaults to result.value

    Returns:
        LegacyOutputRecord with an empty spending script for base outputs

    Raises:
        ValueOverflow: If the amount does not fit a signed 64-bit field
    """
    if value is None:
        value = result.value
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueOverflow(f"Value must be an integer, got {type(value).__name__}")
    # The amount is unsigned; a negative record value would reinterpret its sign.
    if not 0 <= value <= INT64_MAX:
        raise ValueOverflow(f"Value {value} does not fit a signed 64-bit field")

    return LegacyOutputRecord(
        value=value,
        script=bytes(result.script_pubkey),
        spending_script=bytes(result.taproot_reveal_script or b""),
    )
