"""Command table mapping editor commands onto document operations."""

from __future__ import annotations

import re
from functools import partial
from pathlib import Path
from typing import Callable, Dict, List, Tuple

from linedit.document import DocumentError
from linedit.runtime import telemetry
from linedit.storage import StorageError, load_document, save_document

from .base import CommandContext, CommandResult

CommandHandler = Callable[[CommandContext, str], CommandResult]

MENU: Tuple[str, ...] = (
    "1. Insert Line",
    "2. Delete Line",
    "3. Copy Line",
    "4. Paste Line",
    "5. Save to File",
    "6. Open from File",
    "7. Word Count",
    "8. Display Text",
    "9. Insert Line at Position",
    "10. Move Line",
    "11. Undo",
    "12. Clear Undo Stack",
    "13. Reverse Lines",
    "14. Exit",
)

_COMMAND_RE = re.compile(r"\s*(\S+)\s?(.*)", re.DOTALL)
_ARGUMENT_RE = re.compile(r"\s*(\S*)\s?(.*)", re.DOTALL)


class UsageError(ValueError):
    """Raised when a command's arguments cannot be parsed."""


def submit_command_line(context: CommandContext, line: str) -> CommandResult:
    """Parse ``line`` and run the matching command against the session."""

    match = _COMMAND_RE.match(line)
    if match is None:
        return CommandResult(status="empty")
    command, args = match.group(1), match.group(2)
    context.history.append(line)
    context.bus.emit("command.submit", line.strip())

    handler = _COMMAND_HANDLERS.get(command.lower())
    if handler is None:
        return _fail(context, command, "Invalid choice.", status="unknown")

    version = context.document.version
    try:
        result = handler(context, args)
    except UsageError as exc:
        return _fail(context, command, str(exc))
    except (DocumentError, StorageError) as exc:
        return _fail(context, command, str(exc))

    if context.document.version != version:
        context.bus.emit("document.changed", context.document.snapshot())
    return result


def _fail(
    context: CommandContext, command: str, message: str, *, status: str = "error"
) -> CommandResult:
    telemetry.record_event(
        "command.error",
        level="info",
        data={"command": command, "reason": message},
        logger_name="linedit.commands",
    )
    context.bus.emit("command.error", {"command": command, "message": message})
    return CommandResult(status=status, message=message)


def _parse_ints(args: str, count: int, usage: str) -> Tuple[List[int], str]:
    """Read ``count`` leading integers from ``args``; return them with the rest."""

    values: List[int] = []
    rest = args
    for _ in range(count):
        head, rest = _ARGUMENT_RE.match(rest).groups()
        try:
            values.append(int(head))
        except ValueError:
            raise UsageError(usage) from None
    return values, rest


def _handle_insert(context: CommandContext, args: str) -> CommandResult:
    position = context.document.insert_end(args)
    return CommandResult(message=f"Inserted line {position}.")


def _handle_insert_at(context: CommandContext, args: str) -> CommandResult:
    (position,), text = _parse_ints(args, 1, "Usage: insert-at <position> <text>")
    context.document.insert_at(text, position)
    return CommandResult(message=f"Inserted line {position}.")


def _handle_delete(context: CommandContext, args: str) -> CommandResult:
    (position,), _ = _parse_ints(args, 1, "Usage: delete <line>")
    context.document.delete_at(position)
    return CommandResult(message=f"Deleted line {position}.")


def _handle_copy(context: CommandContext, args: str) -> CommandResult:
    (position,), _ = _parse_ints(args, 1, "Usage: copy <line>")
    context.document.copy_at(position)
    return CommandResult(message=f"Copied line {position}.")


def _handle_paste(context: CommandContext, args: str) -> CommandResult:
    del args
    position = context.document.paste()
    return CommandResult(message=f"Pasted the copied line as line {position}.")


def _handle_move(context: CommandContext, args: str) -> CommandResult:
    (source, target), _ = _parse_ints(args, 2, "Usage: move <source> <target>")
    final = context.document.move_line(source, target)
    return CommandResult(message=f"Moved line {source} to {final}.")


def _handle_count(context: CommandContext, args: str) -> CommandResult:
    del args
    return CommandResult(message=f"Word Count: {context.document.word_count()}")


def _handle_display(context: CommandContext, args: str) -> CommandResult:
    del args
    output = tuple(f"{number}: {text}" for number, text in context.document.numbered())
    return CommandResult(output=output)


def _handle_undo(context: CommandContext, args: str) -> CommandResult:
    del args
    context.document.pop_front_to_undo()
    return CommandResult(message="Undo successful.")


def _handle_clear_undo(context: CommandContext, args: str) -> CommandResult:
    del args
    context.document.clear_undo()
    return CommandResult(message="Undo stack cleared.")


def _handle_reverse(context: CommandContext, args: str) -> CommandResult:
    del args
    context.document.reverse()
    return CommandResult(message="Lines reversed.")


def _handle_save(context: CommandContext, args: str) -> CommandResult:
    name = args.strip()
    path = Path(name) if name else context.path
    if path is None:
        raise UsageError("Usage: save <file>")
    settings = context.settings
    save_document(
        context.document,
        path,
        encoding=settings.encoding,
        atomic=settings.atomic_save,
    )
    context.path = path
    context.bus.emit("document.saved", str(path))
    return CommandResult(message=f"Saved {context.document.line_count} lines to {path}.")


def _handle_open(context: CommandContext, args: str) -> CommandResult:
    name = args.strip()
    if not name:
        raise UsageError("Usage: open <file>")
    path = Path(name)
    count = load_document(context.document, path, encoding=context.settings.encoding)
    context.path = path
    context.bus.emit("document.loaded", str(path))
    return CommandResult(message=f"Loaded {count} lines from {path}.")


def _handle_exit(
    context: CommandContext, args: str, *, force: bool = False
) -> CommandResult:
    del args
    if context.document.dirty and not force:
        return CommandResult(
            status="error",
            message="No write since last change (add ! to override).",
        )
    context.bus.emit("session.exit", {"force": force})
    return CommandResult(message="Goodbye.", exit_requested=True)


def _handle_help(context: CommandContext, args: str) -> CommandResult:
    del context, args
    return CommandResult(output=MENU)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "insert": _handle_insert,
    "i": _handle_insert,
    "1": _handle_insert,
    "delete": _handle_delete,
    "d": _handle_delete,
    "2": _handle_delete,
    "copy": _handle_copy,
    "y": _handle_copy,
    "3": _handle_copy,
    "paste": _handle_paste,
    "p": _handle_paste,
    "4": _handle_paste,
    "save": _handle_save,
    "w": _handle_save,
    "5": _handle_save,
    "open": _handle_open,
    "e": _handle_open,
    "6": _handle_open,
    "count": _handle_count,
    "wc": _handle_count,
    "7": _handle_count,
    "display": _handle_display,
    "print": _handle_display,
    "l": _handle_display,
    "8": _handle_display,
    "insert-at": _handle_insert_at,
    "ia": _handle_insert_at,
    "9": _handle_insert_at,
    "move": _handle_move,
    "m": _handle_move,
    "10": _handle_move,
    "undo": _handle_undo,
    "u": _handle_undo,
    "11": _handle_undo,
    "clear-undo": _handle_clear_undo,
    "cu": _handle_clear_undo,
    "12": _handle_clear_undo,
    "reverse": _handle_reverse,
    "r": _handle_reverse,
    "13": _handle_reverse,
    "exit": _handle_exit,
    "quit": _handle_exit,
    "q": _handle_exit,
    "14": partial(_handle_exit, force=True),
    "exit!": partial(_handle_exit, force=True),
    "quit!": partial(_handle_exit, force=True),
    "q!": partial(_handle_exit, force=True),
    "help": _handle_help,
    "menu": _handle_help,
    "?": _handle_help,
}


def command_names() -> Tuple[str, ...]:
    return tuple(sorted(_COMMAND_HANDLERS))


__all__ = ["MENU", "UsageError", "command_names", "submit_command_line"]
