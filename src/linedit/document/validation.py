"""Validation helpers shared across document operations."""

from __future__ import annotations

from typing import Type

from .errors import InvalidLineText, InvalidPosition, LineNotFound, PositionNotFound

_TERMINATORS = ("\n", "\r")


def ensure_line_text(text: object) -> str:
    if not isinstance(text, str):
        raise InvalidLineText(f"Line text must be str, got {type(text).__name__}")
    if any(mark in text for mark in _TERMINATORS):
        raise InvalidLineText("Line text cannot contain a line terminator")
    return text


def coerce_position(value: object, *, message: str = "Invalid line number.") -> int:
    """Return ``value`` as a 1-based position or raise :class:`InvalidPosition`."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPosition(message)
    if value < 1:
        raise InvalidPosition(message, position=value)
    return value


def ensure_position(
    position: object,
    line_count: int,
    *,
    missing: Type[PositionNotFound] = LineNotFound,
    message: str = "Line not found.",
) -> int:
    """Map a 1-based position onto a list index, or raise.

    ``position < 1`` is always :class:`InvalidPosition`; anything past
    ``line_count`` raises ``missing`` so callers can tell a source from a
    target failure.
    """

    checked = coerce_position(position)
    if checked > line_count:
        raise missing(message, position=checked)
    return checked - 1
