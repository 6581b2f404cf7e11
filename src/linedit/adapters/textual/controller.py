"""Textual-free controller that wires the command driver into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Sequence

from linedit.commands import CommandContext, CommandResult, submit_command_line

_FORWARDED_EVENTS = (
    "command.submit",
    "command.error",
    "document.changed",
    "document.saved",
    "document.loaded",
    "session.exit",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_document: Callable[[Sequence[str]], None]
    update_status: Callable[[str], None] = _noop
    show_output: Callable[[Sequence[str]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges the command driver + bus events to a Textual-friendly surface."""

    def __init__(self, context: CommandContext, hooks: TextualUIHooks) -> None:
        self.context = context
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_document()

    def submit(self, line: str) -> CommandResult:
        """Run one command line and push the outcome to the UI."""

        self._log_state("command ->", line=line)
        result = submit_command_line(self.context, line)
        self._after_result(result)
        self._log_state(
            "result <-",
            status=result.status,
            message=result.message,
            exit_requested=result.exit_requested,
        )
        return result

    def _after_result(self, result: CommandResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self.hooks.show_output(result.output)
        self._refresh_document()

    def _subscribe_events(self) -> None:
        bus = self.context.bus
        for event in _FORWARDED_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def _refresh_document(self) -> None:
        lines = [f"{number}: {text}" for number, text in self.context.document.numbered()]
        self.hooks.update_document(lines)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        document = self.context.document
        return {
            "document": document.name,
            "lines": document.line_count,
            "version": document.version,
            "dirty": document.dirty,
            "path": str(self.context.path) if self.context.path else None,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
