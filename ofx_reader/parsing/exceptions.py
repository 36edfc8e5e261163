"""
Exceptions raised while reading OFX documents.

All of them inherit from OFXError so callers can catch the family at once.
"""
from typing import Optional, Sequence


class OFXError(Exception):
    """Base exception for all OFX reading errors."""

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code


class RootTagMissingError(OFXError):
    """
    Raised when the input has no <OFX> root tag.

    Only raised on request (OFXReader.read(strict=True)); by default a missing
    root tag means "not an OFX document" and parse() returns None.
    """

    def __init__(self, message: str = "No <OFX> root tag found", code: str = "ROOT_TAG_MISSING"):
        super().__init__(message, code)


class EncodingConversionError(OFXError):
    """Raised when transcoding the document to UTF-8 fails or yields nothing."""

    def __init__(self, source_encoding: str, reason: str = None, code: str = "ENCODING_CONVERSION"):
        message = f"Could not convert content from {source_encoding} to UTF-8"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, code)
        self.source_encoding = source_encoding
        self.reason = reason


class MalformedMarkupError(OFXError):
    """
    Raised when the recovered markup is still not well-formed XML.

    Carries the tree parser's diagnostics so the offending location can be
    reported:
    - line and column of each structural error
    - the parser's own message and error code
    """

    def __init__(self, message: str, diagnostics: Sequence = (), code: str = "MALFORMED_MARKUP"):
        self.diagnostics = tuple(diagnostics)

        details = [str(d) for d in self.diagnostics]
        full_message = f"{message}\n" + "\n".join(details) if details else message
        super().__init__(full_message, code)


class InvalidDateError(OFXError):
    """Raised when a required date field cannot be parsed."""

    def __init__(self, raw: str, field: Optional[str] = None, code: str = "INVALID_DATE"):
        self.raw = raw
        self.field = field

        message = f"Invalid OFX date: {raw!r}"
        if field:
            message = f"{message} (field {field})"
        super().__init__(message, code)
