"""Console front end: argument parsing and the interactive command loop."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from linedit.commands import MENU, CommandContext, submit_command_line
from linedit.document import Document
from linedit.runtime import EditorSettings, telemetry
from linedit.storage import StorageError, load_document

logger = telemetry.get_logger("linedit.cli")


def run_console(
    context: CommandContext,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """Read commands until ``exit`` or end of input."""

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    settings = context.settings

    if settings.show_menu:
        stdout.write("\n".join(MENU) + "\n")

    while True:
        stdout.write(settings.prompt)
        stdout.flush()
        raw = stdin.readline()
        if not raw:
            stdout.write("\n")
            break
        result = submit_command_line(context, raw.rstrip("\r\n"))
        for line in result.output:
            stdout.write(f"{line}\n")
        if result.message:
            stdout.write(f"{result.message}\n")
        if result.exit_requested:
            break
    return 0


def build_context(
    file: Optional[str], settings: EditorSettings, *, stderr: Optional[TextIO] = None
) -> CommandContext:
    """Create a session, loading ``file`` when it already exists."""

    stderr = stderr or sys.stderr
    if file is None:
        return CommandContext(settings=settings)

    path = Path(file)
    context = CommandContext(document=Document(name=path.name), settings=settings)
    if not path.exists():
        context.path = path
        return context
    try:
        load_document(context.document, path, encoding=settings.encoding)
    except StorageError as exc:
        logger.debug("initial load of %s failed: %s", path, exc)
        stderr.write(f"{exc}\n")
        return context
    context.path = path
    return context


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="linedit", description="Line-oriented text editor."
    )
    parser.add_argument("file", nargs="?", help="File to open at start")
    parser.add_argument(
        "--tui", action="store_true", help="Run the Textual interface"
    )
    parser.add_argument(
        "--encoding",
        default=None,
        help="Text encoding for load and save (default: $LINEDIT_ENCODING or utf-8)",
    )
    parser.add_argument(
        "--no-atomic-save",
        dest="atomic_save",
        action="store_false",
        default=None,
        help="Write files in place instead of through a temporary file",
    )
    parser.add_argument(
        "--no-menu",
        dest="show_menu",
        action="store_false",
        default=None,
        help="Do not print the command menu on start",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Logging preset to activate",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    try:
        settings = EditorSettings.from_env().override(
            encoding=args.encoding,
            atomic_save=args.atomic_save,
            show_menu=args.show_menu,
        )
    except ValueError as exc:
        sys.stderr.write(f"linedit: {exc}\n")
        return 2

    context = build_context(args.file, settings)
    if args.tui:
        from linedit.adapters.textual.app import LineEditorApp

        LineEditorApp(context).run()
        return 0
    return run_console(context)


if __name__ == "__main__":  # pragma: no cover - manual entry point
    raise SystemExit(main())
