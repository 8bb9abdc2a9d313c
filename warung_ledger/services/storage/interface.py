"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap Google Sheets for a real document database later
2. Use in-memory storage for testing
3. Keep ledger logic decoupled from storage implementation

The interface is intentionally tiny - single-record inserts and deletes
plus filtered reads. No transactions, no joins, no multi-record atomicity.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from warung_ledger.models.audit import AuditEvent
from warung_ledger.models.transaction import TransactionFilter, TransactionRecord


class TransactionStorageInterface(ABC):
    """
    Abstract interface for ledger transaction storage.

    Any storage implementation (Google Sheets, in-memory, a document DB)
    must implement these methods. Ordering is always by occurred_at with
    ties broken by insertion order.
    """

    @abstractmethod
    async def insert(self, record: TransactionRecord) -> UUID:
        """
        Store a new record.

        Args:
            record: The record to save (its id is ignored)

        Returns:
            The id assigned to the stored record

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    async def find_many(
        self,
        filter: TransactionFilter,
        descending: bool = False,
    ) -> list[TransactionRecord]:
        """
        List records matching a filter.

        Args:
            filter: Owner, kinds and time bounds to match
            descending: Newest first when True

        Returns:
            Matching records ordered by occurred_at
        """
        pass

    @abstractmethod
    async def find_one(
        self,
        filter: TransactionFilter,
    ) -> Optional[TransactionRecord]:
        """
        Get the most recent record matching a filter.

        Returns:
            The latest record by occurred_at (last inserted on ties),
            or None when nothing matches
        """
        pass

    @abstractmethod
    async def delete_by_id(self, transaction_id: UUID) -> bool:
        """
        Delete a record by ID.

        Returns:
            True if a record was deleted
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
