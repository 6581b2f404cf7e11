"""Line-addressed document model.

Lines live in a plain Python list; a line's position is always its list
index plus one, so inserts and deletes renumber everything after them
implicitly. Mutations run inside a telemetry span and bump ``version`` only
when they succeed. Every precondition is checked before the list is touched,
which is what keeps failed calls free of partial edits.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from linedit.runtime import telemetry

from .clipboard import Clipboard
from .errors import (
    EmptyClipboard,
    EmptyDocument,
    InvalidPosition,
    SourceNotFound,
    TargetNotFound,
)
from .undo import UndoBuffer
from .validation import coerce_position, ensure_line_text, ensure_position

logger = telemetry.get_logger("linedit.document")


class Document:
    """Ordered, 1-indexed sequence of text lines.

    The document owns its clipboard and its undo stack. Nothing returned from
    this class aliases internal storage: projections are tuples and the
    clipboard keeps a value copy.
    """

    def __init__(
        self,
        lines: Iterable[str] = (),
        *,
        name: str = "untitled",
    ) -> None:
        self.name = name
        self._lines: List[str] = [ensure_line_text(line) for line in lines]
        self._clipboard = Clipboard()
        self._undo = UndoBuffer()
        self.version = 0
        self.dirty = False

    # -- read side -----------------------------------------------------

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def snapshot(self) -> Tuple[str, ...]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    to_sequence = snapshot

    def get_line(self, position: int) -> str:
        return self._lines[ensure_position(position, len(self._lines))]

    def numbered(self) -> Iterator[Tuple[int, str]]:
        """Yield ``(position, text)`` pairs in document order."""

        return enumerate(self.snapshot(), start=1)

    def word_count(self) -> int:
        return sum(len(line.split()) for line in self._lines)

    @property
    def clipboard(self) -> Optional[str]:
        return self._clipboard.get()

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    def undo_snapshot(self) -> Sequence[str]:
        return self._undo.snapshot()

    # -- edits ---------------------------------------------------------

    def insert_end(self, text: str) -> int:
        line = ensure_line_text(text)
        with self._edit("insert_end"):
            self._lines.append(line)
        return len(self._lines)

    def insert_at(self, text: str, position: int) -> int:
        line = ensure_line_text(text)
        position = coerce_position(position, message="Invalid position.")
        if position > len(self._lines) + 1:
            raise InvalidPosition("Position out of bounds.", position=position)
        with self._edit("insert_at", position=position):
            self._lines.insert(position - 1, line)
        return position

    def delete_at(self, position: int) -> str:
        index = ensure_position(position, len(self._lines))
        with self._edit("delete_at", position=position):
            removed = self._lines.pop(index)
        return removed

    def copy_at(self, position: int) -> str:
        text = self._lines[ensure_position(position, len(self._lines))]
        self._clipboard.set(text)
        logger.debug("document %s: copied line %s", self.name, position)
        return text

    def paste(self) -> int:
        text = self._clipboard.get()
        if text is None:
            raise EmptyClipboard("Nothing to paste.")
        return self.insert_end(text)

    def move_line(self, source: int, target: int) -> int:
        """Move line ``source`` in front of line ``target``.

        ``target`` is read against the sequence with the source line already
        taken out, and may be one past its end to append. Returns the final
        position of the moved line.
        """

        source = coerce_position(source, message="Invalid positions.")
        target = coerce_position(target, message="Invalid positions.")
        if source == target:
            raise InvalidPosition("Invalid positions.", position=target)
        index = ensure_position(
            source,
            len(self._lines),
            missing=SourceNotFound,
            message="Source position not found.",
        )
        if target > len(self._lines):
            raise TargetNotFound("Target position not found.", position=target)
        with self._edit("move_line", source=source, target=target):
            line = self._lines.pop(index)
            self._lines.insert(target - 1, line)
        return target

    def pop_front_to_undo(self) -> str:
        if not self._lines:
            raise EmptyDocument("Nothing to undo.")
        with self._edit("pop_front_to_undo"):
            line = self._lines.pop(0)
            self._undo.push(line)
        return line

    def clear_undo(self) -> int:
        discarded = self._undo.clear()
        logger.debug("document %s: discarded %d undo entries", self.name, discarded)
        return discarded

    def reverse(self) -> None:
        with self._edit("reverse"):
            self._lines.reverse()

    def replace_all(self, lines: Iterable[str]) -> None:
        """Swap in a whole new line sequence, e.g. after a load."""

        replacement = [ensure_line_text(line) for line in lines]
        with self._edit("replace_all", count=len(replacement)):
            self._lines = replacement

    def mark_clean(self) -> None:
        self.dirty = False

    @contextmanager
    def _edit(self, label: str, **metadata: object) -> Iterator[None]:
        with telemetry.span(
            f"document::{label}",
            component="document",
            metadata={"document": self.name, **metadata},
        ):
            yield
        self.version += 1
        self.dirty = True

    def __repr__(self) -> str:
        return f"Document(name={self.name!r}, lines={len(self._lines)}, version={self.version})"
