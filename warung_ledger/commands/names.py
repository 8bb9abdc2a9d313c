"""Command names and the default command table."""

from enum import Enum

from warung_ledger.models.transaction import ReportPeriod


class CommandName(str, Enum):
    HELP = "help"
    RECORD_INCOME = "record-income"
    RECORD_EXPENSE = "record-expense"
    RECORD_PURCHASE = "record-purchase"
    REPORT = "report"
    PROFIT_TODAY = "profit-today"
    MENU = "menu"
    DELETE_LAST = "delete-last"


# Command word (without prefix) -> command. The first word listed for a
# command is the one shown in help text; the Indonesian words are aliases.
DEFAULT_COMMAND_TABLE: dict[str, CommandName] = {
    "help": CommandName.HELP,
    "start": CommandName.HELP,
    "income": CommandName.RECORD_INCOME,
    "masuk": CommandName.RECORD_INCOME,
    "expense": CommandName.RECORD_EXPENSE,
    "keluar": CommandName.RECORD_EXPENSE,
    "purchase": CommandName.RECORD_PURCHASE,
    "belanja": CommandName.RECORD_PURCHASE,
    "report": CommandName.REPORT,
    "laporan": CommandName.REPORT,
    "profit": CommandName.PROFIT_TODAY,
    "untung": CommandName.PROFIT_TODAY,
    "menu": CommandName.MENU,
    "delete": CommandName.DELETE_LAST,
    "hapus": CommandName.DELETE_LAST,
}

PERIOD_ALIASES: dict[str, ReportPeriod] = {
    "daily": ReportPeriod.DAILY,
    "harian": ReportPeriod.DAILY,
    "weekly": ReportPeriod.WEEKLY,
    "mingguan": ReportPeriod.WEEKLY,
    "monthly": ReportPeriod.MONTHLY,
    "bulanan": ReportPeriod.MONTHLY,
}
