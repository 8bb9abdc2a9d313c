"""
Reply Formatter

Renders operation results as chat text.

DESIGN DECISION: Formatting is presentation only. It never validates,
never rounds amounts and never touches storage; everything it shows has
already been checked by the parser and computed by the ledger.

Every reply category has a fixed icon so the stall owner can tell at a
glance what kind of answer came back:
- ✅ 💸 🛒 🗑️  confirmations
- ❌          errors and warnings
- 📊 📈 🎉 😰 reports
"""

from datetime import datetime, tzinfo
from typing import Optional

from warung_ledger.commands import (
    CommandError,
    CommandName,
    CommandParser,
    UnknownCommandError,
    UsageError,
    ValidationError,
)
from warung_ledger.models.transaction import (
    DeleteResult,
    PeriodReport,
    ProfitSummary,
    ReportPeriod,
    TransactionKind,
    TransactionRecord,
)


# Static menu: (section heading, [(dish, price)])
MENU: list[tuple[str, list[tuple[str, int]]]] = [
    ("🐟 CATFISH", [
        ("Lele Bakar", 12000),
        ("Lele Goreng", 10000),
    ]),
    ("🐔 CHICKEN", [
        ("Ayam Bakar", 15000),
        ("Ayam Goreng", 13000),
    ]),
    ("🥤 DRINKS", [
        ("Es Teh", 3000),
        ("Es Jeruk", 4000),
        ("Air Mineral", 2000),
    ]),
]

PERIOD_TITLES = {
    ReportPeriod.DAILY: "TODAY",
    ReportPeriod.WEEKLY: "LAST 7 DAYS",
    ReportPeriod.MONTHLY: "LAST 30 DAYS",
}

_RECORDED_HEADINGS = {
    TransactionKind.INCOME: "✅ INCOME RECORDED!",
    TransactionKind.EXPENSE: "💸 EXPENSE RECORDED!",
    TransactionKind.PURCHASE: "🛒 PURCHASE RECORDED!",
}

# (argument synopsis, description, examples)
_USAGE = {
    CommandName.RECORD_INCOME: (
        "[item] [price] [qty]",
        "Record a sale",
        ["ayam-goreng 15000 2", "lele-bakar 12000 1"],
    ),
    CommandName.RECORD_EXPENSE: (
        "[item] [amount]",
        "Record an expense",
        ["gas 25000", "listrik 100000"],
    ),
    CommandName.RECORD_PURCHASE: (
        "[item] [amount]",
        "Record a stock purchase",
        ["lele 200000", "bumbu 50000"],
    ),
    CommandName.PROFIT_TODAY: ("", "Today's profit", []),
    CommandName.REPORT: (
        "[period]",
        "Report (daily/weekly/monthly)",
        ["weekly"],
    ),
    CommandName.MENU: ("", "Show the menu", []),
    CommandName.DELETE_LAST: ("", "Delete the last transaction", []),
}

GENERIC_FAILURE = "❌ Something went wrong. Please try again or contact the admin."


class ReplyFormatter:
    """
    Turns ledger results into chat messages.

    Args:
        parser: Source of the command words shown in help and usage hints
        tz: Timezone timestamps are shown in
        currency_label: e.g. "Rp"
        thousands_separator: e.g. "." for 36.000
        datetime_format / date_format: strftime patterns
        business_name: Shown in help and menu headings
    """

    def __init__(
        self,
        parser: CommandParser,
        tz: tzinfo,
        currency_label: str = "Rp",
        thousands_separator: str = ".",
        datetime_format: str = "%d/%m/%Y, %H.%M.%S",
        date_format: str = "%d/%m/%Y",
        business_name: str = "Warung Pecel Lele",
    ):
        self._parser = parser
        self._tz = tz
        self._currency_label = currency_label
        self._separator = thousands_separator
        self._datetime_format = datetime_format
        self._date_format = date_format
        self._business_name = business_name

    # -------------------------------------------------------------------------
    # Primitives
    # -------------------------------------------------------------------------

    def format_currency(self, amount: int) -> str:
        """36000 -> 'Rp 36.000'."""
        digits = f"{amount:,}".replace(",", self._separator)
        return f"{self._currency_label} {digits}"

    def format_datetime(self, moment: datetime) -> str:
        return moment.astimezone(self._tz).strftime(self._datetime_format)

    def format_date(self, moment: datetime) -> str:
        return moment.astimezone(self._tz).strftime(self._date_format)

    def _word(self, command: CommandName) -> str:
        return self._parser.word_for(command)

    # -------------------------------------------------------------------------
    # Confirmations
    # -------------------------------------------------------------------------

    def recorded(self, record: TransactionRecord) -> str:
        """Confirmation for a newly stored record."""
        lines = [_RECORDED_HEADINGS[record.kind], "", f"📝 Item: {record.item}"]

        if record.kind == TransactionKind.INCOME:
            lines += [
                f"🔢 Quantity: {record.quantity}",
                f"💰 Unit price: {self.format_currency(record.unit_price)}",
                f"💵 Total: {self.format_currency(record.amount)}",
            ]
        else:
            lines.append(f"💰 Amount: {self.format_currency(record.amount)}")

        lines.append(f"📅 {self.format_datetime(record.occurred_at)}")
        return "\n".join(lines)

    def deleted(self, result: DeleteResult) -> str:
        if not result.found:
            return "❌ No transactions to delete"

        record = result.deleted
        return (
            "🗑️ TRANSACTION DELETED!\n\n"
            f"📝 {record.item}\n"
            f"💰 {self.format_currency(record.amount)}\n"
            f"📅 {self.format_datetime(record.occurred_at)}"
        )

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def profit_summary(self, summary: ProfitSummary) -> str:
        status_emoji = "🎉" if summary.is_profit else "😰"
        status_text = "PROFIT" if summary.is_profit else "LOSS"
        margin = f"{summary.margin_percent:.1f}" if summary.income_total > 0 else "0"

        return (
            "📊 TODAY'S PROFIT REPORT\n"
            f"📅 {self.format_date(summary.window_start)}\n\n"
            f"💰 Income: {self.format_currency(summary.income_total)}\n"
            f"   └ {summary.income_count} transactions\n\n"
            f"💸 Expenses: {self.format_currency(summary.outgoing_total)}\n"
            f"   └ {summary.outgoing_count} transactions\n\n"
            f"{status_emoji} {status_text}: {self.format_currency(abs(summary.profit))}\n\n"
            f"📈 Margin: {margin}%"
        )

    def period_report(self, report: PeriodReport) -> str:
        title = PERIOD_TITLES[report.period]

        if not report.data_found:
            return f"📊 No transactions for the period: {title.lower()}"

        status_emoji = "🎉" if report.profit >= 0 else "😰"
        lines = [
            f"📊 REPORT {title}",
            "",
            f"💰 Total income: {self.format_currency(report.income_total)}",
            f"💸 Total expenses: {self.format_currency(report.outgoing_total)}",
            f"{status_emoji} Profit: {self.format_currency(report.profit)}",
        ]

        if report.items:
            lines += ["", "📈 ITEMS SOLD:"]
            for stats in report.items:
                lines.append(
                    f"• {stats.item}: {stats.quantity}x - {self.format_currency(stats.total)}"
                )

        return "\n".join(lines)

    # -------------------------------------------------------------------------
    # Static content
    # -------------------------------------------------------------------------

    def help(self) -> str:
        lines = [f"🤖 {self._business_name.upper()} BOT", "", "📝 MAIN COMMANDS:"]
        for command, (synopsis, description, _) in _USAGE.items():
            usage = f"{self._word(command)} {synopsis}".rstrip()
            lines.append(f"{usage} - {description}")

        lines += [
            "",
            "📝 EXAMPLES:",
            f"{self._word(CommandName.RECORD_INCOME)} lele-bakar 12000 2",
            f"{self._word(CommandName.RECORD_EXPENSE)} gas 25000",
            f"{self._word(CommandName.RECORD_PURCHASE)} bumbu 50000",
            f"{self._word(CommandName.REPORT)} weekly",
            "",
            "💡 Tip: use a dash (-) for spaces in item names",
        ]
        return "\n".join(lines)

    def menu(self) -> str:
        lines = [f"🍽️ MENU {self._business_name.upper()}"]
        for heading, dishes in MENU:
            lines += ["", f"{heading}:"]
            for dish, price in dishes:
                lines.append(f"• {dish} - {self.format_currency(price)}")

        lines += [
            "",
            "💡 Tip: use the menu names when recording sales",
            f"Example: {self._word(CommandName.RECORD_INCOME)} lele-bakar 12000 2",
        ]
        return "\n".join(lines)

    # -------------------------------------------------------------------------
    # Errors
    # -------------------------------------------------------------------------

    def usage(self, command: CommandName, detail: Optional[str] = None) -> str:
        synopsis, _, examples = _USAGE.get(command, ("", "", []))
        word = self._word(command)

        lines = ["❌ Wrong format!"]
        if detail:
            lines.append(detail)
        if examples:
            lines += ["", "📝 Examples:"]
            lines += [f"{word} {example}" for example in examples]
        lines += ["", f"Format: {word} {synopsis}".rstrip()]
        return "\n".join(lines)

    def validation(self, error: ValidationError) -> str:
        return f"❌ {error.field.capitalize()} must be a positive number!"

    def unknown_command(self) -> str:
        return (
            "❌ Command not recognized.\n"
            f"Type {self._word(CommandName.HELP)} to see the list of commands."
        )

    def failure(self) -> str:
        return GENERIC_FAILURE

    def error(self, error: CommandError) -> str:
        """Reply for any rejected command."""
        if isinstance(error, UnknownCommandError):
            return self.unknown_command()
        if isinstance(error, ValidationError):
            return self.validation(error)
        if isinstance(error, UsageError):
            return self.usage(error.command, error.detail)
        return f"❌ {error.message}"

