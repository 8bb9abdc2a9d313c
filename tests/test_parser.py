"""Tests for the chat command parser."""

import pytest

from warung_ledger.commands import (
    CommandName,
    CommandParser,
    UnknownCommandError,
    UsageError,
    ValidationError,
    normalize_item,
)
from warung_ledger.models.transaction import ReportPeriod


class TestIgnoredInput:
    """Ordinary chat is not an error."""

    @pytest.mark.parametrize("text", ["", "   ", "halo bos", "income lele 12000"])
    def test_non_prefixed_text_is_ignored(self, parser, text):
        assert parser.parse(text) is None

    def test_unknown_prefixed_command(self, parser):
        with pytest.raises(UnknownCommandError) as exc_info:
            parser.parse("/foo bar")
        assert exc_info.value.word == "/foo"

    def test_bare_prefix_is_unknown(self, parser):
        with pytest.raises(UnknownCommandError):
            parser.parse("/")


class TestRecordIncome:
    """Tests for record-income argument handling."""

    def test_full_command(self, parser):
        command = parser.parse("/income lele-bakar 12000 2")
        assert command.name == CommandName.RECORD_INCOME
        assert command.item == "lele bakar"
        assert command.amount == 12000
        assert command.quantity == 2

    def test_command_word_is_case_insensitive(self, parser):
        command = parser.parse("/MASUK ayam-goreng 15000")
        assert command.name == CommandName.RECORD_INCOME
        assert command.item == "ayam goreng"

    def test_quantity_defaults_to_one(self, parser):
        assert parser.parse("/income es-teh 3000").quantity == 1

    @pytest.mark.parametrize("qty", ["abc", "0", "-3"])
    def test_bad_quantity_falls_back_to_one(self, parser, qty):
        assert parser.parse(f"/income es-teh 3000 {qty}").quantity == 1

    def test_extra_whitespace_between_arguments(self, parser):
        command = parser.parse("  /income   lele-bakar    12000   3 ")
        assert (command.item, command.amount, command.quantity) == ("lele bakar", 12000, 3)

    def test_missing_arguments(self, parser):
        with pytest.raises(UsageError) as exc_info:
            parser.parse("/income lele-bakar")
        assert exc_info.value.command == CommandName.RECORD_INCOME

    def test_non_numeric_price(self, parser):
        with pytest.raises(ValidationError) as exc_info:
            parser.parse("/income lele-bakar abc")
        assert exc_info.value.field == "price"
        assert exc_info.value.command == CommandName.RECORD_INCOME

    @pytest.mark.parametrize("price", ["0", "-12000", "12.000", "12k"])
    def test_price_must_be_positive_integer(self, parser, price):
        with pytest.raises(ValidationError):
            parser.parse(f"/income lele-bakar {price}")

    def test_item_made_of_dashes_is_empty(self, parser):
        with pytest.raises(UsageError):
            parser.parse("/income --- 12000")

    def test_item_longer_than_a_record_can_hold(self, parser):
        with pytest.raises(UsageError) as exc_info:
            parser.parse("/income lele-" + "x" * 250 + " 12000 1")
        assert exc_info.value.detail == "Item name is longer than 200 characters"

    def test_item_at_the_limit(self, parser):
        assert len(parser.parse("/expense " + "x" * 200 + " 1000").item) == 200


class TestRecordOutgoing:
    """Tests for record-expense and record-purchase."""

    def test_expense(self, parser):
        command = parser.parse("/expense gas 25000")
        assert command.name == CommandName.RECORD_EXPENSE
        assert command.item == "gas"
        assert command.amount == 25000
        assert command.quantity == 1

    def test_purchase_alias(self, parser):
        command = parser.parse("/belanja minyak-goreng 50000")
        assert command.name == CommandName.RECORD_PURCHASE
        assert command.item == "minyak goreng"

    def test_missing_amount(self, parser):
        with pytest.raises(UsageError) as exc_info:
            parser.parse("/keluar gas")
        assert exc_info.value.command == CommandName.RECORD_EXPENSE

    def test_invalid_amount(self, parser):
        with pytest.raises(ValidationError) as exc_info:
            parser.parse("/purchase lele banyak")
        assert exc_info.value.field == "amount"


class TestReport:
    """Tests for report period selection."""

    @pytest.mark.parametrize("text,period", [
        ("/report", ReportPeriod.DAILY),
        ("/report daily", ReportPeriod.DAILY),
        ("/report weekly", ReportPeriod.WEEKLY),
        ("/report MONTHLY", ReportPeriod.MONTHLY),
        ("/laporan mingguan", ReportPeriod.WEEKLY),
        ("/laporan bulanan", ReportPeriod.MONTHLY),
        ("/report yearly", ReportPeriod.DAILY),
    ])
    def test_period(self, parser, text, period):
        command = parser.parse(text)
        assert command.name == CommandName.REPORT
        assert command.period == period


class TestNoArgumentCommands:

    @pytest.mark.parametrize("text,name", [
        ("/help", CommandName.HELP),
        ("/start", CommandName.HELP),
        ("/menu", CommandName.MENU),
        ("/profit", CommandName.PROFIT_TODAY),
        ("/untung", CommandName.PROFIT_TODAY),
        ("/delete", CommandName.DELETE_LAST),
        ("/hapus sekarang", CommandName.DELETE_LAST),
    ])
    def test_command(self, parser, text, name):
        assert parser.parse(text).name == name


class TestCommandTable:
    """Prefix and command words are deployment settings."""

    def test_custom_prefix(self):
        parser = CommandParser(prefix="!")
        assert parser.parse("/income lele 12000") is None
        assert parser.parse("!income lele 12000").name == CommandName.RECORD_INCOME

    def test_custom_table(self):
        parser = CommandParser(command_table={"jual": CommandName.RECORD_INCOME})
        assert parser.parse("/jual lele 12000").amount == 12000
        with pytest.raises(UnknownCommandError):
            parser.parse("/income lele 12000")

    def test_word_for_uses_first_word(self, parser):
        assert parser.word_for(CommandName.RECORD_INCOME) == "/income"
        assert parser.word_for(CommandName.HELP) == "/help"

    def test_normalize_item(self):
        assert normalize_item("lele-bakar-sambal") == "lele bakar sambal"
        assert normalize_item("-es-teh-") == "es teh"
