"""Single-slot clipboard holding the most recently copied line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class Clipboard:
    """Holds a value copy of one line.

    Pasting reads the slot without clearing it, so a copied line can be
    pasted any number of times until the next copy replaces it.
    """

    _value: Optional[str] = None

    def get(self) -> Optional[str]:
        return self._value

    def set(self, text: str) -> None:
        self._value = str(text)
