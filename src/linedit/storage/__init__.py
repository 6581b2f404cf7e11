"""Plain text persistence for documents."""

from .codec import decode_lines, encode_lines
from .errors import StorageError
from .files import load_document, save_document

__all__ = [
    "StorageError",
    "decode_lines",
    "encode_lines",
    "load_document",
    "save_document",
]
