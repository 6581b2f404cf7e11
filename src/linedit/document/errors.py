"""Error kinds raised by document operations."""

from __future__ import annotations


class DocumentError(RuntimeError):
    """Base class for every recoverable document-level failure."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class InvalidPosition(DocumentError):
    """Position outside the addressable domain of the requested operation."""


class PositionNotFound(DocumentError):
    """Position is well formed but past the current content."""


class LineNotFound(PositionNotFound):
    pass


class SourceNotFound(PositionNotFound):
    pass


class TargetNotFound(PositionNotFound):
    pass


class EmptyClipboard(DocumentError):
    pass


class EmptyDocument(DocumentError):
    pass


class InvalidLineText(DocumentError):
    """Raised when a line would carry a line terminator or is not text."""


__all__ = [
    "DocumentError",
    "InvalidPosition",
    "PositionNotFound",
    "LineNotFound",
    "SourceNotFound",
    "TargetNotFound",
    "EmptyClipboard",
    "EmptyDocument",
    "InvalidLineText",
]
