"""Executable Textual app that hosts the line editor."""

from __future__ import annotations

from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the TUI is run
    from textual.app import App, ComposeResult
    from textual.containers import VerticalScroll
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use linedit.adapters.textual.app"
    ) from exc

from linedit.commands import CommandContext, MENU
from linedit.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks

logger = telemetry.get_logger("linedit.adapters.textual")


class LineEditorApp(App[None]):
    """Numbered document view with a command input underneath."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#document-area {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#output {
		height: auto;
		max-height: 8;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, context: Optional[CommandContext] = None) -> None:
        super().__init__()
        self.context = context or CommandContext()
        self.adapter: TextualEditorAdapter | None = None
        self._document_widget: Static | None = None
        self._output_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll(id="document-area"):
            self._document_widget = Static("", id="document-view", markup=False)
            yield self._document_widget
        self._output_widget = Static("\n".join(MENU), id="output", markup=False)
        yield self._output_widget
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Input(placeholder="command (help for menu)", id="command-input")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_document=self._update_document,
            update_status=self._update_status,
            show_output=self._show_output,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.context, hooks)
        self.title = self.context.document.name
        self.query_one(Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        line = event.value
        event.input.value = ""
        result = self.adapter.submit(line)
        if result.exit_requested:
            self.exit()

    def _update_document(self, lines: Sequence[str]) -> None:
        if self._document_widget:
            self._document_widget.update("\n".join(lines))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _show_output(self, output: Sequence[str]) -> None:
        if self._output_widget and output:
            self._output_widget.update("\n".join(output))

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name in {"document.saved", "document.loaded"} and isinstance(payload, str):
            self.sub_title = payload

    def _log_line(self, line: str) -> None:
        logger.debug(line)


__all__ = ["LineEditorApp"]
