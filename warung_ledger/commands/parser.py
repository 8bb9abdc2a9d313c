"""
Command Parser

Turns one chat line into a ParsedCommand.

Rules:
- The first whitespace-separated token, lower-cased, is the command word
- Lines that do not start with the command prefix are ordinary chat and
  are ignored (parse returns None)
- Prefixed words missing from the command table raise UnknownCommandError
- Bad arguments raise UsageError / ValidationError; nothing here touches
  storage, so a rejected command never leaves a partial record behind

Item names are typed with dashes instead of spaces ("lele-bakar") because
the argument list is whitespace separated.
"""

import re
from typing import Optional

from pydantic import BaseModel, Field

from warung_ledger.commands.errors import (
    UnknownCommandError,
    UsageError,
    ValidationError,
)
from warung_ledger.commands.names import (
    DEFAULT_COMMAND_TABLE,
    PERIOD_ALIASES,
    CommandName,
)
from warung_ledger.models.transaction import ITEM_MAX_LENGTH, ReportPeriod


ITEM_SPACE_PLACEHOLDER = "-"

_INTEGER = re.compile(r"[+-]?\d+")


class ParsedCommand(BaseModel):
    """A command with validated, typed arguments."""

    name: CommandName

    # Record commands
    item: Optional[str] = None
    amount: Optional[int] = Field(
        default=None,
        gt=0,
        description="Unit price for income, total for expense/purchase"
    )
    quantity: int = Field(default=1, ge=1)

    # Report command
    period: Optional[ReportPeriod] = None


def normalize_item(token: str) -> str:
    """'lele-bakar' -> 'lele bakar'."""
    return token.replace(ITEM_SPACE_PLACEHOLDER, " ").strip()


class CommandParser:
    """
    Parses chat lines against a command table.

    Args:
        prefix: Character(s) that mark a command, e.g. "/"
        command_table: Command word (without prefix) -> CommandName
    """

    def __init__(
        self,
        prefix: str = "/",
        command_table: Optional[dict[str, CommandName]] = None,
    ):
        self.prefix = prefix
        self._table = dict(command_table or DEFAULT_COMMAND_TABLE)

    def word_for(self, command: CommandName) -> str:
        """Prefixed word used to show a command in help text."""
        for word, name in self._table.items():
            if name == command:
                return f"{self.prefix}{word}"
        return f"{self.prefix}{command.value}"

    def parse(self, text: str) -> Optional[ParsedCommand]:
        """
        Parse a chat line.

        Returns:
            The parsed command, or None for ordinary chat

        Raises:
            UnknownCommandError, UsageError, ValidationError
        """
        tokens = text.split()
        if not tokens:
            return None

        word = tokens[0].lower()
        if not word.startswith(self.prefix):
            return None

        name = self._table.get(word[len(self.prefix):])
        if name is None:
            raise UnknownCommandError(word)

        args = tokens[1:]

        if name == CommandName.RECORD_INCOME:
            return self._parse_income(args)
        elif name in (CommandName.RECORD_EXPENSE, CommandName.RECORD_PURCHASE):
            return self._parse_outgoing(name, args)
        elif name == CommandName.REPORT:
            return self._parse_report(args)
        else:
            # help, menu, profit-today, delete-last take no arguments
            return ParsedCommand(name=name)

    def _parse_item(self, name: CommandName, token: str) -> str:
        item = normalize_item(token)
        if not item:
            raise UsageError(name, "Item name is empty")
        if len(item) > ITEM_MAX_LENGTH:
            raise UsageError(
                name, f"Item name is longer than {ITEM_MAX_LENGTH} characters"
            )
        return item

    def _parse_income(self, args: list[str]) -> ParsedCommand:
        name = CommandName.RECORD_INCOME
        if len(args) < 2:
            raise UsageError(name)

        item = self._parse_item(name, args[0])
        price = _positive_int(name, "price", args[1])
        quantity = _quantity(args[2]) if len(args) > 2 else 1

        return ParsedCommand(name=name, item=item, amount=price, quantity=quantity)

    def _parse_outgoing(self, name: CommandName, args: list[str]) -> ParsedCommand:
        if len(args) < 2:
            raise UsageError(name)

        item = self._parse_item(name, args[0])
        amount = _positive_int(name, "amount", args[1])

        return ParsedCommand(name=name, item=item, amount=amount)

    def _parse_report(self, args: list[str]) -> ParsedCommand:
        period = ReportPeriod.DAILY
        if args:
            # Unknown periods fall back to daily rather than erroring
            period = PERIOD_ALIASES.get(args[0].lower(), ReportPeriod.DAILY)
        return ParsedCommand(name=CommandName.REPORT, period=period)


def _positive_int(name: CommandName, field: str, token: str) -> int:
    if not _INTEGER.fullmatch(token):
        raise ValidationError(name, field, token)
    value = int(token)
    if value <= 0:
        raise ValidationError(name, field, token)
    return value


def _quantity(token: str) -> int:
    """Quantity is forgiving: anything that is not a positive integer means 1."""
    if _INTEGER.fullmatch(token) and int(token) >= 1:
        return int(token)
    return 1
