"""Newline-delimited text codec for document lines."""

from __future__ import annotations

from typing import Iterable, List

from .errors import StorageError

TERMINATOR = "\n"


def encode_lines(lines: Iterable[str], *, encoding: str = "utf-8") -> bytes:
    """Serialize ``lines``, writing a terminator after every line."""

    text = "".join(f"{line}{TERMINATOR}" for line in lines)
    try:
        return text.encode(encoding)
    except UnicodeEncodeError as exc:
        raise StorageError(f"Cannot encode document as {encoding}: {exc}") from exc


def decode_lines(data: bytes, *, encoding: str = "utf-8") -> List[str]:
    """Split ``data`` into lines.

    A trailing terminator does not produce an extra empty line and a final
    unterminated line is kept. ``\\r\\n`` counts as one terminator.
    """

    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise StorageError(f"Cannot decode file as {encoding}: {exc}") from exc
    if not text:
        return []
    lines = text.split(TERMINATOR)
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
