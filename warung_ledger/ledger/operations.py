"""
Ledger Operations

One operation per command. Each operation does at most one read and
one write against the store, and returns a structured result for the
reply formatter.

GUARANTEES:
- Every read and write is scoped to a single owner
- Aggregates are computed only from records that actually exist
- An empty report window is reported as empty, never as zeros
- Nothing is updated in place; delete_last removes at most one record

Record operations are NOT idempotent: each call stores a new entry, so
callers must never retry them automatically.
"""

from datetime import datetime, time, timedelta, tzinfo
from typing import Callable, Optional

from warung_ledger.models.transaction import (
    DeleteResult,
    ItemSales,
    PeriodReport,
    ProfitSummary,
    ReportPeriod,
    TransactionFilter,
    TransactionKind,
    TransactionRecord,
)
from warung_ledger.services.storage import TransactionStorageInterface


# How far back each report window reaches (daily starts at local midnight)
REPORT_LOOKBACK = {
    ReportPeriod.WEEKLY: timedelta(days=7),
    ReportPeriod.MONTHLY: timedelta(days=30),
}


class LedgerOperations:
    """
    Executes ledger commands against transaction storage.

    Args:
        storage: Where records live
        tz: Local timezone of the stall; "today" is computed in it
        clock: Returns the current time (injectable for tests)
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        tz: tzinfo,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._storage = storage
        self._tz = tz
        self._clock = clock or (lambda: datetime.now(self._tz))

    def now(self) -> datetime:
        return self._clock().astimezone(self._tz)

    def start_of_day(self, moment: Optional[datetime] = None) -> datetime:
        moment = moment or self.now()
        return datetime.combine(moment.date(), time.min, tzinfo=self._tz)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def _insert(self, record: TransactionRecord) -> TransactionRecord:
        transaction_id = await self._storage.insert(record)
        return record.model_copy(update={"id": transaction_id})

    async def record_income(
        self,
        owner_id: str,
        item: str,
        unit_price: int,
        quantity: int = 1,
    ) -> TransactionRecord:
        """Record a sale. The stored amount is unit_price * quantity."""
        record = TransactionRecord(
            kind=TransactionKind.INCOME,
            item=item,
            amount=unit_price * quantity,
            quantity=quantity,
            occurred_at=self.now(),
            owner_id=owner_id,
            note=f"Sale of {item}",
        )
        return await self._insert(record)

    async def record_expense(
        self,
        owner_id: str,
        item: str,
        amount: int,
    ) -> TransactionRecord:
        """Record a running cost (gas, electricity...)."""
        record = TransactionRecord(
            kind=TransactionKind.EXPENSE,
            item=item,
            amount=amount,
            occurred_at=self.now(),
            owner_id=owner_id,
            note=f"Expense: {item}",
        )
        return await self._insert(record)

    async def record_purchase(
        self,
        owner_id: str,
        item: str,
        amount: int,
    ) -> TransactionRecord:
        """Record a stock purchase (fish, chicken, spices...)."""
        record = TransactionRecord(
            kind=TransactionKind.PURCHASE,
            item=item,
            amount=amount,
            occurred_at=self.now(),
            owner_id=owner_id,
            note=f"Purchase: {item}",
        )
        return await self._insert(record)

    async def delete_last(self, owner_id: str) -> DeleteResult:
        """
        Delete the owner's most recent record.

        Most recent is by occurred_at, with insertion order breaking ties.
        If the store reports nothing was removed (the row is already gone),
        nothing is reported as deleted.
        """
        latest = await self._storage.find_one(TransactionFilter(owner_id=owner_id))
        if latest is None:
            return DeleteResult()

        if not await self._storage.delete_by_id(latest.id):
            return DeleteResult()
        return DeleteResult(deleted=latest)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def profit_today(self, owner_id: str) -> ProfitSummary:
        """Income vs expenses+purchases for the current local day."""
        window_start = self.start_of_day()
        window_end = datetime.combine(
            window_start.date() + timedelta(days=1), time.min, tzinfo=self._tz
        )

        records = await self._storage.find_many(
            TransactionFilter(
                owner_id=owner_id,
                occurred_from=window_start,
                occurred_before=window_end,
            )
        )

        income = [r for r in records if not r.kind.is_outgoing]
        outgoing = [r for r in records if r.kind.is_outgoing]

        return ProfitSummary(
            window_start=window_start,
            window_end=window_end,
            income_total=sum(r.amount for r in income),
            income_count=len(income),
            outgoing_total=sum(r.amount for r in outgoing),
            outgoing_count=len(outgoing),
        )

    def report_window_start(self, period: ReportPeriod) -> datetime:
        if period in REPORT_LOOKBACK:
            return self.now() - REPORT_LOOKBACK[period]
        return self.start_of_day()

    async def report(
        self,
        owner_id: str,
        period: ReportPeriod = ReportPeriod.DAILY,
    ) -> PeriodReport:
        """
        Totals and per-item sales from the window start until now.

        The item breakdown covers income only and lists items in the order
        they are first met while scanning newest to oldest.
        """
        generated_at = self.now()
        window_start = self.report_window_start(period)

        records = await self._storage.find_many(
            TransactionFilter(owner_id=owner_id, occurred_from=window_start),
            descending=True,
        )

        if not records:
            return PeriodReport(
                period=period,
                window_start=window_start,
                generated_at=generated_at,
                data_found=False,
            )

        income = [r for r in records if not r.kind.is_outgoing]
        outgoing = [r for r in records if r.kind.is_outgoing]

        return PeriodReport(
            period=period,
            window_start=window_start,
            generated_at=generated_at,
            data_found=True,
            transaction_count=len(records),
            income_total=sum(r.amount for r in income),
            outgoing_total=sum(r.amount for r in outgoing),
            items=item_breakdown(income),
        )


def item_breakdown(records: list[TransactionRecord]) -> list[ItemSales]:
    """Group records by item text, keeping first-seen order."""
    groups: dict[str, ItemSales] = {}

    for record in records:
        if record.item not in groups:
            groups[record.item] = ItemSales(item=record.item)
        stats = groups[record.item]
        stats.quantity += record.quantity
        stats.total += record.amount

    return list(groups.values())
