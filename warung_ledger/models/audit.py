"""
Audit Models for Warung Ledger

Every command the bot handles leaves a trace:
1. What was received and from whom
2. What was written to or removed from the ledger
3. What went wrong when a collaborator failed

DESIGN DECISION: Audit logs are append-only. We never delete or modify them,
even when the ledger entry they describe is deleted.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Inbound
    MESSAGE_RECEIVED = "message_received"
    COMMAND_REJECTED = "command_rejected"
    COMMAND_UNRECOGNIZED = "command_unrecognized"

    # Ledger changes
    TRANSACTION_RECORDED = "transaction_recorded"
    TRANSACTION_DELETED = "transaction_deleted"

    # Reads
    REPORT_GENERATED = "report_generated"

    # System events
    SYSTEM_ERROR = "system_error"
    REPLY_FAILED = "reply_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Whose conversation this happened in
    owner_id: Optional[str] = Field(
        default=None,
        description="Sender/conversation id"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'report')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - one id per handled message
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one message"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user command?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "owner_id": self.owner_id,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_sheets_row(self) -> list:
        """
        Convert to a row suitable for Google Sheets storage.

        Returns columns in order:
        [event_id, timestamp, event_type, severity, owner_id, entity_type,
         entity_id, correlation_id, description, details_json, error_message,
         is_user_action]
        """
        return [
            str(self.event_id),
            self.timestamp.isoformat(),
            self.event_type.value,
            self.severity.value,
            self.owner_id or "",
            self.entity_type or "",
            str(self.entity_id) if self.entity_id else "",
            str(self.correlation_id) if self.correlation_id else "",
            self.description,
            json.dumps(self.details) if self.details else "",
            self.error_message or "",
            str(self.is_user_action),
        ]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.message_received(owner_id, text, correlation_id)
        event = AuditEventBuilder.transaction_recorded(record, correlation_id)
    """

    @staticmethod
    def message_received(
        owner_id: str,
        text: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MESSAGE_RECEIVED,
            severity=AuditSeverity.DEBUG,
            owner_id=owner_id,
            correlation_id=correlation_id,
            description="Command message received",
            details={
                "text": text[:200],
            },
            is_user_action=True,
        )

    @staticmethod
    def command_rejected(
        owner_id: str,
        command: str,
        reason: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_REJECTED,
            severity=AuditSeverity.WARNING,
            owner_id=owner_id,
            correlation_id=correlation_id,
            description=f"Command rejected: {command}",
            details={
                "command": command,
                "reason": reason,
            },
        )

    @staticmethod
    def command_unrecognized(
        owner_id: str,
        word: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_UNRECOGNIZED,
            severity=AuditSeverity.INFO,
            owner_id=owner_id,
            correlation_id=correlation_id,
            description=f"Unrecognized command: {word[:100]}",
            details={
                "word": word[:200],
            },
        )

    @staticmethod
    def transaction_recorded(
        transaction_id: UUID,
        owner_id: str,
        kind: str,
        item: str,
        amount: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_RECORDED,
            owner_id=owner_id,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Recorded {kind}: {item} - {amount}",
            details={
                "kind": kind,
                "item": item,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_deleted(
        transaction_id: UUID,
        owner_id: str,
        item: str,
        amount: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            severity=AuditSeverity.WARNING,
            owner_id=owner_id,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Deleted latest entry: {item} - {amount}",
            details={
                "item": item,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def report_generated(
        owner_id: str,
        report_type: str,
        transaction_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            owner_id=owner_id,
            entity_type="report",
            correlation_id=correlation_id,
            description=f"Report generated: {report_type} over {transaction_count} transactions",
            details={
                "report_type": report_type,
                "transaction_count": transaction_count,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        owner_id: Optional[str] = None,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            owner_id=owner_id,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

    @staticmethod
    def reply_failed(
        owner_id: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPLY_FAILED,
            severity=AuditSeverity.ERROR,
            owner_id=owner_id,
            description="Could not deliver reply to channel",
            error_message=error_message,
            correlation_id=correlation_id,
        )
