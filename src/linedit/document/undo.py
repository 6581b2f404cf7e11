"""Stack of lines popped off the front of a document."""

from __future__ import annotations

from typing import List, Tuple


class UndoBuffer:
    """LIFO store owned by a single document.

    Only ``Document.pop_front_to_undo`` pushes here and only
    ``Document.clear_undo`` drains it.
    """

    def __init__(self) -> None:
        self._entries: List[str] = []

    def push(self, line: str) -> None:
        self._entries.append(line)

    def clear(self) -> int:
        discarded = len(self._entries)
        self._entries.clear()
        return discarded

    def snapshot(self) -> Tuple[str, ...]:
        """Return the stacked lines, most recent first."""

        return tuple(reversed(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
