"""
Core Data Models for Warung Ledger

These models define the strict schemas for everything the ledger
stores and computes:
1. TransactionRecord - the only thing that is persisted
2. TransactionFilter - what the ledger may ask the store for
3. Result models - structured outputs handed to the reply formatter

DESIGN DECISION: Records are frozen once built. The ledger never
updates a stored entry in place; a mistake is fixed by deleting the
latest entry and recording it again.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """
    Transaction categories.

    INCOME is money from sales. EXPENSE (running costs such as gas or
    electricity) and PURCHASE (stock such as fish or spices) are both
    outgoing money but are tagged separately so they can be told apart
    in the sheet.
    """
    INCOME = "income"
    EXPENSE = "expense"
    PURCHASE = "purchase"

    @property
    def is_outgoing(self) -> bool:
        return self is not TransactionKind.INCOME


# Longest item name a record can hold
ITEM_MAX_LENGTH = 200


class ReportPeriod(str, Enum):
    """Report windows supported by the report command."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TransactionRecord(BaseModel):
    """
    A single ledger line.

    `amount` is always the total for the line: unit price times quantity
    for income, the raw amount for expenses and purchases.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    # Identity - assigned by the store on insert
    id: Optional[UUID] = Field(
        default=None,
        description="Store-assigned identifier"
    )

    kind: TransactionKind = Field(
        ...,
        description="Income, expense or purchase"
    )
    item: str = Field(
        ...,
        min_length=1,
        max_length=ITEM_MAX_LENGTH,
        description="Item name (normalized, spaces instead of dashes)"
    )
    amount: int = Field(
        ...,
        gt=0,
        description="Line total in whole currency units"
    )
    quantity: int = Field(
        default=1,
        ge=1,
        description="Number of units sold (always 1 for outgoing entries)"
    )
    occurred_at: datetime = Field(
        default_factory=_utcnow,
        description="When the entry was recorded (UTC unless the caller stamps it)"
    )
    owner_id: str = Field(
        ...,
        min_length=1,
        description="Sender/conversation id that owns this entry"
    )
    note: str = Field(
        default="",
        max_length=500,
        description="Free-text description"
    )

    @field_validator('occurred_at')
    @classmethod
    def require_timezone(cls, v: datetime) -> datetime:
        """Naive timestamps are taken to be UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def unit_price(self) -> int:
        return self.amount // self.quantity


class TransactionFilter(BaseModel):
    """
    Filter understood by every transaction store.

    `owner_id` is mandatory: no query may cross owners.
    """
    model_config = ConfigDict(frozen=True)

    owner_id: str = Field(..., min_length=1)
    kinds: Optional[tuple[TransactionKind, ...]] = Field(
        default=None,
        description="Restrict to these kinds (None = all kinds)"
    )
    occurred_from: Optional[datetime] = Field(
        default=None,
        description="Inclusive lower bound on occurred_at"
    )
    occurred_before: Optional[datetime] = Field(
        default=None,
        description="Exclusive upper bound on occurred_at"
    )

    def matches(self, record: TransactionRecord) -> bool:
        """Check a record against this filter."""
        if record.owner_id != self.owner_id:
            return False
        if self.kinds is not None and record.kind not in self.kinds:
            return False
        if self.occurred_from and record.occurred_at < self.occurred_from:
            return False
        if self.occurred_before and record.occurred_at >= self.occurred_before:
            return False
        return True


# =============================================================================
# RESULT MODELS
# =============================================================================

class ProfitSummary(BaseModel):
    """Today's income against today's outgoing money."""

    window_start: datetime
    window_end: datetime

    income_total: int = Field(default=0, ge=0)
    income_count: int = Field(default=0, ge=0)
    outgoing_total: int = Field(default=0, ge=0)
    outgoing_count: int = Field(default=0, ge=0)

    @property
    def profit(self) -> int:
        return self.income_total - self.outgoing_total

    @property
    def is_profit(self) -> bool:
        return self.profit >= 0

    @property
    def margin_percent(self) -> float:
        """Profit as a percentage of income; 0 when there was no income."""
        if self.income_total <= 0:
            return 0.0
        return self.profit / self.income_total * 100


class ItemSales(BaseModel):
    """Sales of one item within a report window."""

    item: str
    quantity: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


class PeriodReport(BaseModel):
    """
    Aggregated report for a period.

    When `data_found` is False the totals carry no meaning and must be
    presented as "no transactions", never as a zero report.
    """

    period: ReportPeriod
    window_start: datetime
    generated_at: datetime

    data_found: bool = Field(
        ...,
        description="Were any transactions found in the window?"
    )
    transaction_count: int = Field(default=0, ge=0)

    income_total: int = Field(default=0, ge=0)
    outgoing_total: int = Field(default=0, ge=0)

    # First-seen order while scanning newest to oldest
    items: list[ItemSales] = Field(default_factory=list)

    @property
    def profit(self) -> int:
        return self.income_total - self.outgoing_total


class DeleteResult(BaseModel):
    """Outcome of deleting the latest entry."""

    deleted: Optional[TransactionRecord] = None

    @property
    def found(self) -> bool:
        return self.deleted is not None
