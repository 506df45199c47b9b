"""Base class for inscription bodies."""

from abc import ABC, abstractmethod


class InscriptionBody(ABC):
    """Content carried inside an inscription envelope.

    Subclasses provide a ``content_type`` attribute holding the MIME type
    recorded in the envelope.
    """

    content_type: str

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Convert to the raw body bytes."""
        pass  # pragma: no cover
