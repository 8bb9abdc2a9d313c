"""Chat command parsing package."""

from warung_ledger.commands.errors import (
    CommandError,
    UnknownCommandError,
    UsageError,
    ValidationError,
)
from warung_ledger.commands.names import (
    DEFAULT_COMMAND_TABLE,
    PERIOD_ALIASES,
    CommandName,
)
from warung_ledger.commands.parser import CommandParser, ParsedCommand, normalize_item

__all__ = [
    "CommandError",
    "CommandName",
    "CommandParser",
    "DEFAULT_COMMAND_TABLE",
    "PERIOD_ALIASES",
    "ParsedCommand",
    "UnknownCommandError",
    "UsageError",
    "ValidationError",
    "normalize_item",
]
