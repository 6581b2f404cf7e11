"""Shared types for the command driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from linedit.document import Document
from linedit.runtime.settings import EditorSettings


@dataclass(slots=True)
class CommandResult:
    """Outcome of one submitted command line."""

    status: str = "ok"
    message: Optional[str] = None
    output: Tuple[str, ...] = ()
    exit_requested: bool = False

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class CommandBus:
    """Minimal event bus letting front ends observe the session."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class CommandContext:
    """Session state every command handler can access."""

    document: Document = field(default_factory=Document)
    bus: CommandBus = field(default_factory=CommandBus)
    settings: EditorSettings = field(default_factory=EditorSettings)
    path: Optional[Path] = None
    history: list[str] = field(default_factory=list)


__all__ = ["CommandBus", "CommandContext", "CommandResult"]
