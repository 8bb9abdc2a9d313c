"""
Command Errors

Everything that can be wrong with a chat command. These are all
recoverable: the dispatcher turns each one into a reply and carries on.
"""

from typing import Optional

from warung_ledger.commands.names import CommandName


class CommandError(Exception):
    """Base exception for rejected commands."""

    def __init__(self, message: str, command: Optional[CommandName] = None):
        super().__init__(message)
        self.message = message
        self.command = command


class UsageError(CommandError):
    """Arguments are missing or malformed; the user needs the usage hint."""

    DEFAULT_MESSAGE = "Wrong format"

    def __init__(self, command: CommandName, message: str = DEFAULT_MESSAGE):
        super().__init__(message, command)

    @property
    def detail(self) -> Optional[str]:
        """What exactly was wrong, when more is known than the format."""
        return None if self.message == self.DEFAULT_MESSAGE else self.message


class ValidationError(CommandError):
    """A numeric argument is not a positive whole number."""

    def __init__(self, command: CommandName, field: str, value: str):
        super().__init__(f"{field} must be a positive number, got {value!r}", command)
        self.field = field
        self.value = value


class UnknownCommandError(CommandError):
    """Prefixed word that is not in the command table."""

    def __init__(self, word: str):
        super().__init__(f"Command not recognized: {word}")
        self.word = word
