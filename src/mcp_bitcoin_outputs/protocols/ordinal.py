"""Arbitrary-content (NFT) inscriptions."""

from dataclasses import dataclass
from typing import Union

from mcp_bitcoin_outputs.errors import InvalidPayload
from mcp_bitcoin_outputs.protocols.base import InscriptionBody


@dataclass
class OrdinalContent(InscriptionBody):
    """Raw payload tagged with its MIME type."""

    content_type: Union[str, bytes]
    payload: bytes

    def __post_init__(self):
        mime = self.content_type
        if isinstance(mime, (bytes, bytearray)):
            try:
                mime = bytes(mime).decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidPayload(f"MIME type is not valid UTF-8: {e}") from e
        if not isinstance(mime, str):
            raise InvalidPayload(f"MIME type must be text, got {type(mime).__name__}")
        if not mime:
            raise InvalidPayload("MIME type must not be empty")
        if "\x00" in mime:
            raise InvalidPayload("MIME type must not contain NUL characters")
        try:
            mime.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidPayload(f"MIME type is not encodable as UTF-8: {e}") from e
        self.content_type = mime

        if not isinstance(self.payload, (bytes, bytearray, memoryview)):
            raise InvalidPayload(f"Payload must be bytes, got {type(self.payload).__name__}")
        self.payload = bytes(self.payload)

    @property
    def mime_type(self) -> str:
        return self.content_type

    def to_bytes(self) -> bytes:
        return self.payload
