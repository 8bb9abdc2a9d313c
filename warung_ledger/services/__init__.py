"""Services package."""

from warung_ledger.services.channel import (
    ChannelError,
    InboundMessage,
    MessageChannel,
    MessageKind,
)
from warung_ledger.services.storage import (
    AuditStorageInterface,
    ConnectionError,
    GoogleSheetsAuditStorage,
    GoogleSheetsClient,
    GoogleSheetsTransactionStorage,
    InMemoryAuditStorage,
    InMemoryTransactionStorage,
    StorageError,
    TransactionStorageInterface,
)

__all__ = [
    # Channel
    "ChannelError",
    "InboundMessage",
    "MessageChannel",
    "MessageKind",
    # Storage services
    "AuditStorageInterface",
    "ConnectionError",
    "GoogleSheetsAuditStorage",
    "GoogleSheetsClient",
    "GoogleSheetsTransactionStorage",
    "InMemoryAuditStorage",
    "InMemoryTransactionStorage",
    "StorageError",
    "TransactionStorageInterface",
]
