from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from linedit.commands import (
    MENU,
    CommandContext,
    CommandResult,
    command_names,
    submit_command_line,
)
from linedit.document import Document


def make_context(*lines: str, path: Optional[Path] = None) -> CommandContext:
    return CommandContext(document=Document(lines, name="test"), path=path)


def run(context: CommandContext, *lines: str) -> List[CommandResult]:
    return [submit_command_line(context, line) for line in lines]


def test_insert_keeps_inner_whitespace() -> None:
    context = make_context()

    result = submit_command_line(context, "insert hello   spaced  world ")

    assert result.ok
    assert result.message == "Inserted line 1."
    assert context.document.snapshot() == ("hello   spaced  world ",)


def test_menu_numbers_alias_commands() -> None:
    context = make_context()

    run(context, "1 first", "1 second", "9 1 zero", "13")

    assert context.document.snapshot() == ("second", "first", "zero")


def test_display_numbers_lines() -> None:
    context = make_context("a", "b")

    result = submit_command_line(context, "display")

    assert result.output == ("1: a", "2: b")
    assert result.message is None


def test_copy_paste_twice() -> None:
    context = make_context("a", "b")

    results = run(context, "copy 1", "paste", "paste")

    assert all(result.ok for result in results)
    assert context.document.snapshot() == ("a", "b", "a", "a")


def test_move_and_word_count() -> None:
    context = make_context("a b", "c", "d e f")

    move, count = run(context, "move 1 3", "wc")

    assert move.message == "Moved line 1 to 3."
    assert context.document.snapshot() == ("c", "d e f", "a b")
    assert count.message == "Word Count: 6"


@pytest.mark.parametrize(
    ("line", "message"),
    [
        ("delete 1", "Line not found."),
        ("delete 0", "Invalid line number."),
        ("copy 4", "Line not found."),
        ("paste", "Nothing to paste."),
        ("undo", "Nothing to undo."),
        ("insert-at 3 x", "Position out of bounds."),
        ("insert-at 0 x", "Invalid position."),
        ("move 1 1", "Invalid positions."),
        ("move 9 1", "Source position not found."),
    ],
)
def test_document_errors_become_messages(line: str, message: str) -> None:
    context = make_context()
    if not line.startswith(("delete", "copy", "paste", "undo")):
        context.document.insert_end("only")

    result = submit_command_line(context, line)

    assert result.status == "error"
    assert result.message == message


def test_move_target_not_found_is_reported_and_reverted() -> None:
    context = make_context("a", "b", "c")

    result = submit_command_line(context, "move 1 4")

    assert result.message == "Target position not found."
    assert context.document.snapshot() == ("a", "b", "c")


@pytest.mark.parametrize(
    "line", ["delete", "delete two", "move 1", "insert-at x text", "open"]
)
def test_usage_errors(line: str) -> None:
    context = make_context("a")

    result = submit_command_line(context, line)

    assert result.status == "error"
    assert result.message is not None
    assert result.message.startswith("Usage:")
    assert context.document.snapshot() == ("a",)


def test_unknown_and_empty_commands() -> None:
    context = make_context()

    unknown = submit_command_line(context, "frobnicate")
    empty = submit_command_line(context, "   ")

    assert unknown.status == "unknown"
    assert unknown.message == "Invalid choice."
    assert empty.status == "empty"


def test_undo_and_clear_undo() -> None:
    context = make_context("a", "b")

    undo, clear = run(context, "undo", "clear-undo")

    assert undo.message == "Undo successful."
    assert clear.message == "Undo stack cleared."
    assert context.document.snapshot() == ("b",)
    assert context.document.undo_depth == 0


def test_reverse_message() -> None:
    context = make_context("a", "b")

    result = submit_command_line(context, "reverse")

    assert result.message == "Lines reversed."
    assert context.document.snapshot() == ("b", "a")


def test_save_then_save_again_reuses_path(tmp_path: Path) -> None:
    target = tmp_path / "out.txt"
    context = make_context("a")

    first = submit_command_line(context, f"save {target}")
    submit_command_line(context, "insert b")
    second = submit_command_line(context, "w")

    assert first.ok and second.ok
    assert context.path == target
    assert target.read_text(encoding="utf-8") == "a\nb\n"
    assert context.document.dirty is False


def test_save_without_path_is_usage_error() -> None:
    context = make_context("a")

    result = submit_command_line(context, "save")

    assert result.status == "error"
    assert result.message == "Usage: save <file>"


def test_open_replaces_document_and_failed_open_keeps_it(tmp_path: Path) -> None:
    source = tmp_path / "in.txt"
    source.write_text("line1\nline2\n", encoding="utf-8")
    context = make_context("old")

    opened = submit_command_line(context, f"open {source}")
    failed = submit_command_line(context, f"open {tmp_path / 'missing.txt'}")

    assert opened.message == f"Loaded 2 lines from {source}."
    assert failed.status == "error"
    assert failed.message == "Failed to open the file for loading."
    assert context.document.snapshot() == ("line1", "line2")
    assert context.path == source


def test_exit_refuses_with_unsaved_changes() -> None:
    context = make_context()
    submit_command_line(context, "insert a")

    refused = submit_command_line(context, "exit")
    forced = submit_command_line(context, "exit!")

    assert refused.status == "error"
    assert refused.exit_requested is False
    assert forced.exit_requested is True


def test_exit_on_clean_document() -> None:
    context = make_context("a")

    result = submit_command_line(context, "14")

    assert result.exit_requested is True


def test_menu_exit_ignores_unsaved_changes() -> None:
    context = make_context()
    submit_command_line(context, "1 draft")

    result = submit_command_line(context, "14")

    assert context.document.dirty is True
    assert result.ok
    assert result.exit_requested is True


def test_help_lists_menu() -> None:
    context = make_context()

    result = submit_command_line(context, "help")

    assert result.output == MENU
    assert len(MENU) == 14


def test_bus_events_and_history() -> None:
    context = make_context()
    events: List[Tuple[str, object]] = []
    for name in ("command.submit", "command.error", "document.changed"):
        context.bus.subscribe(
            name, lambda payload, name=name: events.append((name, payload))
        )

    run(context, "insert a", "delete 5", "display")

    names = [name for name, _ in events]
    assert names.count("command.submit") == 3
    assert ("document.changed", ("a",)) in events
    assert names.count("document.changed") == 1
    assert ("command.error", {"command": "delete", "message": "Line not found."}) in events
    assert context.history == ["insert a", "delete 5", "display"]


def test_command_names_include_menu_numbers() -> None:
    names = command_names()

    for number in range(1, 15):
        assert str(number) in names
