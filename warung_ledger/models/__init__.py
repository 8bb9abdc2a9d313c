"""
Data Models Package

This package contains all Pydantic models used by Warung Ledger.
All data flowing through the system must conform to these schemas.
"""

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
from warung_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "DeleteResult",
    "ItemSales",
    "PeriodReport",
    "ProfitSummary",
    "ReportPeriod",
    "TransactionFilter",
    "TransactionKind",
    "TransactionRecord",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
