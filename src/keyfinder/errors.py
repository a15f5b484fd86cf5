"""Exception types shared by the parser, the store and the search core."""
from __future__ import annotations


class KeyFinderError(Exception):
    """Base class for failures raised by this package."""


class InvalidArgument(KeyFinderError, ValueError):
    """Raised when a search operation is called with a missing corpus or path."""


class JsonParseError(KeyFinderError, ValueError):
    """Raised when JSON source text cannot be parsed."""

    def __init__(self, message: str, offset: int = -1) -> None:
        super().__init__(message)
        self.offset = offset


class DocumentUnavailable(KeyFinderError, RuntimeError):
    """Raised when a document cannot yield its root value (stale or unparseable)."""

    def __init__(self, doc_id: str, reason: str = "") -> None:
        super().__init__(f"{doc_id}: {reason}" if reason else doc_id)
        self.doc_id = doc_id


# failures that cost a single document, never the whole scan
DOCUMENT_ERRORS = (DocumentUnavailable, JsonParseError)
