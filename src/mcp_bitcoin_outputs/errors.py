"""Exceptions raised while building output scripts."""


class OutputScriptError(Exception):
    """Base exception for all output building errors."""
    pass


class InvalidKeyEncoding(OutputScriptError):
    """Raised when a public key is not a valid secp256k1 encoding."""
    pass


class InvalidPayload(OutputScriptError):
    """Raised when a ticker, MIME type or payload cannot be encoded."""
    pass


class PayloadTooLarge(OutputScriptError):
    """Raised when an inscription body exceeds the size cap."""
    pass


class ValueOverflow(OutputScriptError):
    """Raised when an amount does not fit its target representation."""
    pass


class SerializationFailure(OutputScriptError):
    """Raised when a well-formed record cannot be encoded.

    This signals a broken internal invariant, not bad input, and is never
    converted into a null result.
    """
    pass


# Errors caused by caller input; recovered at the boundary.
INPUT_ERRORS = (InvalidKeyEncoding, InvalidPayload, PayloadTooLarge, ValueOverflow)
