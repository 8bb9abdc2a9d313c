"""Tests for ledger operations against in-memory storage."""

import asyncio
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from warung_ledger.ledger import LedgerOperations
from warung_ledger.models.transaction import (
    ItemSales,
    ReportPeriod,
    TransactionFilter,
    TransactionKind,
)
from warung_ledger.services.storage import InMemoryTransactionStorage


JAKARTA = ZoneInfo("Asia/Jakarta")


def run(coro):
    return asyncio.run(coro)


def all_records(storage, owner_id="A"):
    return run(storage.find_many(TransactionFilter(owner_id=owner_id)))


class TestRecording:
    """Tests for the three record operations."""

    def test_income_amount_is_price_times_quantity(self, operations, storage):
        record = run(operations.record_income("A", "lele bakar", 12000, 3))

        assert record.id is not None
        assert record.kind == TransactionKind.INCOME
        assert record.amount == 36000
        assert record.quantity == 3
        assert record.note == "Sale of lele bakar"

        stored = all_records(storage)
        assert len(stored) == 1
        assert stored[0].id == record.id
        assert stored[0].amount == 36000

    def test_expense_amount_verbatim(self, operations, storage):
        record = run(operations.record_expense("A", "gas", 25000))
        assert record.kind == TransactionKind.EXPENSE
        assert record.amount == 25000
        assert record.quantity == 1

    def test_purchase_amount_verbatim(self, operations):
        record = run(operations.record_purchase("A", "lele", 200000))
        assert record.kind == TransactionKind.PURCHASE
        assert record.amount == 200000
        assert record.quantity == 1

    def test_recorded_at_clock_time(self, operations, clock):
        record = run(operations.record_expense("A", "gas", 25000))
        assert record.occurred_at == clock.now

    def test_each_call_creates_a_new_record(self, operations, storage):
        run(operations.record_expense("A", "gas", 25000))
        run(operations.record_expense("A", "gas", 25000))
        assert len(all_records(storage)) == 2


class TestDeleteLast:
    """Tests for delete_last."""

    def test_nothing_to_delete(self, operations):
        result = run(operations.delete_last("A"))
        assert result.found is False
        assert result.deleted is None

    def test_removes_latest_by_time(self, operations, storage, clock):
        run(operations.record_income("A", "lele bakar", 12000, 2))
        clock.advance(minutes=1)
        run(operations.record_income("A", "lele bakar", 12000, 1))
        clock.advance(minutes=1)
        run(operations.record_expense("A", "gas", 25000))

        first = run(operations.delete_last("A"))
        assert first.deleted.item == "gas"
        assert len(all_records(storage)) == 2

        second = run(operations.delete_last("A"))
        assert second.deleted.item == "lele bakar"
        assert second.deleted.quantity == 1
        assert len(all_records(storage)) == 1

    def test_ties_broken_by_creation_order(self, operations):
        run(operations.record_expense("A", "gas", 25000))
        run(operations.record_purchase("A", "bumbu", 50000))

        result = run(operations.delete_last("A"))
        assert result.deleted.item == "bumbu"

    def test_only_touches_own_records(self, operations, storage):
        run(operations.record_expense("B", "gas", 25000))

        result = run(operations.delete_last("A"))
        assert result.found is False
        assert len(all_records(storage, "B")) == 1

    def test_row_already_gone(self, clock):
        class VanishingStorage(InMemoryTransactionStorage):
            async def delete_by_id(self, transaction_id):
                return False

        operations = LedgerOperations(VanishingStorage(), tz=JAKARTA, clock=clock)
        run(operations.record_expense("A", "gas", 25000))

        result = run(operations.delete_last("A"))
        assert result.found is False


class TestProfitToday:
    """Tests for profit_today."""

    def test_income_against_outgoing(self, operations):
        run(operations.record_income("A", "lele bakar", 12000, 3))
        run(operations.record_expense("A", "gas", 25000))
        run(operations.record_purchase("A", "bumbu", 5000))

        summary = run(operations.profit_today("A"))
        assert summary.income_total == 36000
        assert summary.income_count == 1
        assert summary.outgoing_total == 30000
        assert summary.outgoing_count == 2
        assert summary.profit == 6000

    def test_margin_zero_without_income(self, operations):
        run(operations.record_expense("A", "gas", 25000))

        summary = run(operations.profit_today("A"))
        assert summary.margin_percent == 0
        assert summary.profit == -25000

    def test_window_is_the_local_day(self, operations, clock):
        today = clock.now

        clock.now = datetime(2026, 10, 18, 23, 59, tzinfo=JAKARTA)
        run(operations.record_income("A", "kemarin", 10000, 1))
        clock.now = datetime(2026, 10, 20, 0, 0, tzinfo=JAKARTA)
        run(operations.record_income("A", "besok", 10000, 1))
        clock.now = datetime(2026, 10, 19, 0, 0, tzinfo=JAKARTA)
        run(operations.record_income("A", "pagi", 7000, 1))

        clock.now = today
        summary = run(operations.profit_today("A"))
        assert summary.income_total == 7000
        assert summary.income_count == 1
        assert summary.window_start == datetime(2026, 10, 19, tzinfo=JAKARTA)
        assert summary.window_end == datetime(2026, 10, 20, tzinfo=JAKARTA)

    def test_other_owners_excluded(self, operations):
        run(operations.record_income("B", "lele bakar", 12000, 1))
        summary = run(operations.profit_today("A"))
        assert summary.income_total == 0
        assert summary.income_count == 0


class TestReport:
    """Tests for periodic reports."""

    def test_daily_report_example(self, operations, clock):
        run(operations.record_income("A", "lele bakar", 12000, 2))
        clock.advance(minutes=1)
        run(operations.record_income("A", "lele bakar", 12000, 1))
        clock.advance(minutes=1)
        run(operations.record_expense("A", "gas", 25000))

        report = run(operations.report("A", ReportPeriod.DAILY))
        assert report.data_found is True
        assert report.transaction_count == 3
        assert report.income_total == 36000
        assert report.outgoing_total == 25000
        assert report.profit == 11000
        assert report.items == [ItemSales(item="lele bakar", quantity=3, total=36000)]

    def test_empty_window(self, operations):
        report = run(operations.report("A", ReportPeriod.WEEKLY))
        assert report.data_found is False
        assert report.transaction_count == 0
        assert report.items == []

    def test_breakdown_in_first_seen_order_newest_first(self, operations, clock):
        run(operations.record_income("A", "es teh", 3000, 1))
        clock.advance(minutes=1)
        run(operations.record_income("A", "ayam goreng", 13000, 1))
        clock.advance(minutes=1)
        run(operations.record_income("A", "es teh", 3000, 2))
        clock.advance(minutes=1)
        run(operations.record_purchase("A", "es batu", 10000))

        report = run(operations.report("A"))
        assert [s.item for s in report.items] == ["es teh", "ayam goreng"]
        assert report.items[0] == ItemSales(item="es teh", quantity=3, total=9000)

    def test_outgoing_not_in_breakdown(self, operations):
        run(operations.record_expense("A", "gas", 25000))

        report = run(operations.report("A"))
        assert report.data_found is True
        assert report.income_total == 0
        assert report.items == []

    @pytest.mark.parametrize("period,days_back,included", [
        (ReportPeriod.DAILY, 1, False),
        (ReportPeriod.WEEKLY, 6, True),
        (ReportPeriod.WEEKLY, 8, False),
        (ReportPeriod.MONTHLY, 29, True),
        (ReportPeriod.MONTHLY, 31, False),
    ])
    def test_window_start(self, operations, clock, period, days_back, included):
        today = clock.now
        clock.advance(days=-days_back)
        run(operations.record_income("A", "lele bakar", 12000, 1))
        clock.now = today

        report = run(operations.report("A", period))
        assert report.data_found is included

    def test_daily_starts_at_local_midnight(self, operations, clock):
        today = clock.now
        clock.now = datetime(2026, 10, 19, 0, 5, tzinfo=JAKARTA)
        run(operations.record_income("A", "lele bakar", 12000, 1))
        clock.now = today

        report = run(operations.report("A", ReportPeriod.DAILY))
        assert report.window_start == datetime(2026, 10, 19, tzinfo=JAKARTA)
        assert report.income_total == 12000
