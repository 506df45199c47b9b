"""Output intents: what kind of output to build for a recipient key."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class P2PKH:
    """Pay to public key hash."""


@dataclass(frozen=True)
class P2WPKH:
    """Pay to witness public key hash (segwit v0)."""


@dataclass(frozen=True)
class P2TRKeyPath:
    """Pay to taproot, spendable by key path only."""


@dataclass(frozen=True)
class BRC20Inscription:
    """BRC-20 transfer inscribed to the recipient key."""

    tick: str
    amount: int


@dataclass(frozen=True)
class OrdinalInscription:
    """Arbitrary content (NFT) inscribed to the recipient key."""

    mime_type: str
    payload: bytes


OutputIntent = Union[P2PKH, P2WPKH, P2TRKeyPath, BRC20Inscription, OrdinalInscription]


def is_inscription(intent: OutputIntent) -> bool:
    """Whether the intent produces a Taproot reveal script."""
    return isinstance(intent, (BRC20Inscription, OrdinalInscription))
