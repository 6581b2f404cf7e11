"""Document model: ordered lines, clipboard, and undo stack."""

from .clipboard import Clipboard
from .document import Document
from .errors import (
    DocumentError,
    EmptyClipboard,
    EmptyDocument,
    InvalidLineText,
    InvalidPosition,
    LineNotFound,
    PositionNotFound,
    SourceNotFound,
    TargetNotFound,
)
from .undo import UndoBuffer
from .validation import coerce_position, ensure_line_text, ensure_position

__all__ = [
    "Document",
    "Clipboard",
    "UndoBuffer",
    "DocumentError",
    "InvalidPosition",
    "PositionNotFound",
    "LineNotFound",
    "SourceNotFound",
    "TargetNotFound",
    "EmptyClipboard",
    "EmptyDocument",
    "InvalidLineText",
    "coerce_position",
    "ensure_line_text",
    "ensure_position",
]
