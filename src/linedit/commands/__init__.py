"""Command driver translating text commands into document operations."""

from .base import CommandBus, CommandContext, CommandResult
from .handlers import MENU, UsageError, command_names, submit_command_line

__all__ = [
    "CommandBus",
    "CommandContext",
    "CommandResult",
    "MENU",
    "UsageError",
    "command_names",
    "submit_command_line",
]
