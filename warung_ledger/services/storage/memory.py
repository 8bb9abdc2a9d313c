"""
In-Memory Storage Implementation

Keeps everything in process memory. Used by the test suite and by the
local chat front end when no spreadsheet is configured
(STORAGE_BACKEND=memory). Nothing survives a restart.
"""

from typing import Optional
from uuid import UUID, uuid4

from warung_ledger.models.audit import AuditEvent
from warung_ledger.models.transaction import TransactionFilter, TransactionRecord
from warung_ledger.services.storage.interface import (
    AuditStorageInterface,
    TransactionStorageInterface,
)


class InMemoryTransactionStorage(TransactionStorageInterface):
    """Transaction storage backed by a list, in insertion order."""

    def __init__(self):
        self._records: list[TransactionRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    async def insert(self, record: TransactionRecord) -> UUID:
        transaction_id = uuid4()
        self._records.append(record.model_copy(update={"id": transaction_id}))
        return transaction_id

    def _matching(self, filter: TransactionFilter) -> list[TransactionRecord]:
        # sorted() is stable, so equal timestamps keep insertion order
        return sorted(
            (r for r in self._records if filter.matches(r)),
            key=lambda r: r.occurred_at,
        )

    async def find_many(
        self,
        filter: TransactionFilter,
        descending: bool = False,
    ) -> list[TransactionRecord]:
        records = self._matching(filter)
        if descending:
            records.reverse()
        return records

    async def find_one(
        self,
        filter: TransactionFilter,
    ) -> Optional[TransactionRecord]:
        records = self._matching(filter)
        return records[-1] if records else None

    async def delete_by_id(self, transaction_id: UUID) -> bool:
        for idx, record in enumerate(self._records):
            if record.id == transaction_id:
                del self._records[idx]
                return True
        return False


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only audit log kept in a list."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True
