"""
Audit Logger

DESIGN DECISION: Every handled command is logged.
This provides:
1. Traceability of every ledger change
2. Debugging capability when a collaborator fails
3. A history the stall owner can check in the AuditLog sheet

The audit logger:
- Is async so it fits the per-message flow
- Gracefully handles failures (doesn't crash the bot if logging fails)
- Supports correlation IDs to trace the events of one message
"""

from typing import Any, Callable, Optional
from uuid import UUID, uuid4

import structlog

from warung_ledger.models.audit import AuditEvent, AuditEventBuilder
from warung_ledger.models.transaction import TransactionRecord
from warung_ledger.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for persistence and owner visibility)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("warung_ledger.audit")

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def _log_built(
        self,
        build: Callable[..., AuditEvent],
        **fields: Any,
    ) -> bool:
        """
        Build an event and log it.

        Event fields come from chat input, so a builder can reject them.
        That is logged and reported as False, never raised.
        """
        try:
            event = build(**fields)
        except Exception as e:
            self._logger.error(
                "audit_event_invalid",
                builder=getattr(build, "__name__", str(build)),
                error=str(e),
            )
            return False

        return await self.log(event)

    async def log_message_received(
        self,
        owner_id: str,
        text: str,
        correlation_id: UUID,
    ) -> None:
        await self._log_built(
            AuditEventBuilder.message_received,
            owner_id=owner_id,
            text=text,
            correlation_id=correlation_id,
        )

    async def log_command_rejected(
        self,
        owner_id: str,
        command: str,
        reason: str,
        correlation_id: UUID,
    ) -> None:
        """Log a usage or validation rejection."""
        await self._log_built(
            AuditEventBuilder.command_rejected,
            owner_id=owner_id,
            command=command,
            reason=reason,
            correlation_id=correlation_id,
        )

    async def log_command_unrecognized(
        self,
        owner_id: str,
        word: str,
        correlation_id: UUID,
    ) -> None:
        await self._log_built(
            AuditEventBuilder.command_unrecognized,
            owner_id=owner_id,
            word=word,
            correlation_id=correlation_id,
        )

    async def log_transaction_recorded(
        self,
        record: TransactionRecord,
        correlation_id: UUID,
    ) -> None:
        """Log a new ledger entry."""
        await self._log_built(
            AuditEventBuilder.transaction_recorded,
            transaction_id=record.id,
            owner_id=record.owner_id,
            kind=record.kind.value,
            item=record.item,
            amount=record.amount,
            correlation_id=correlation_id,
        )

    async def log_transaction_deleted(
        self,
        record: TransactionRecord,
        correlation_id: UUID,
    ) -> None:
        """Log removal of a ledger entry."""
        await self._log_built(
            AuditEventBuilder.transaction_deleted,
            transaction_id=record.id,
            owner_id=record.owner_id,
            item=record.item,
            amount=record.amount,
            correlation_id=correlation_id,
        )

    async def log_report_generated(
        self,
        owner_id: str,
        report_type: str,
        transaction_count: int,
        correlation_id: UUID,
    ) -> None:
        await self._log_built(
            AuditEventBuilder.report_generated,
            owner_id=owner_id,
            report_type=report_type,
            transaction_count=transaction_count,
            correlation_id=correlation_id,
        )

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        owner_id: Optional[str] = None,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        await self._log_built(
            AuditEventBuilder.system_error,
            error_type=error_type,
            error_message=error_message,
            owner_id=owner_id,
            details=details,
            correlation_id=correlation_id,
        )

    async def log_reply_failed(
        self,
        owner_id: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        await self._log_built(
            AuditEventBuilder.reply_failed,
            owner_id=owner_id,
            error_message=error_message,
            correlation_id=correlation_id,
        )


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this when a message arrives and pass it through the handling
    of that message.
    """
    return uuid4()
