"""
Main Orchestrator for Warung Ledger

This module ties together all the components and defines the
end-to-end flow for one inbound chat message:

    message → normalized text → parse → ledger operation → format → send

DESIGN DECISION: The dispatcher is the single error boundary.
- Rejected commands become usage/validation replies
- Anything a collaborator throws (store, channel) becomes a generic
  "try again" reply and an audit entry
- Nothing escapes handle(), so the channel's receive loop never dies

The dispatcher holds no ambient state: the command table lives in the
parser, and the store and channel are built once at start-up and passed in.
"""

from datetime import datetime
from typing import Awaitable, Callable, Optional
from uuid import UUID

import structlog

from warung_ledger.audit import AuditLogger, create_correlation_id
from warung_ledger.commands import (
    CommandError,
    CommandName,
    CommandParser,
    ParsedCommand,
    UnknownCommandError,
)
from warung_ledger.config import get_settings
from warung_ledger.formatting import ReplyFormatter
from warung_ledger.ledger import LedgerOperations
from warung_ledger.services.channel import InboundMessage, MessageChannel
from warung_ledger.services.storage import (
    AuditStorageInterface,
    GoogleSheetsAuditStorage,
    GoogleSheetsClient,
    GoogleSheetsTransactionStorage,
    InMemoryAuditStorage,
    InMemoryTransactionStorage,
    TransactionStorageInterface,
)


logger = structlog.get_logger("warung_ledger.orchestrator")

Handler = Callable[[str, ParsedCommand, UUID], Awaitable[str]]


class MessageDispatcher:
    """
    Handles inbound messages one at a time.

    Each message triggers at most one ledger operation and exactly one
    reply (or none, for ordinary chat).
    """

    def __init__(
        self,
        parser: CommandParser,
        operations: LedgerOperations,
        formatter: ReplyFormatter,
        channel: MessageChannel,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._parser = parser
        self._operations = operations
        self._formatter = formatter
        self._channel = channel
        self._audit_logger = audit_logger or AuditLogger()

        self._handlers: dict[CommandName, Handler] = {
            CommandName.HELP: self._help,
            CommandName.RECORD_INCOME: self._record_income,
            CommandName.RECORD_EXPENSE: self._record_outgoing,
            CommandName.RECORD_PURCHASE: self._record_outgoing,
            CommandName.REPORT: self._report,
            CommandName.PROFIT_TODAY: self._profit_today,
            CommandName.MENU: self._menu,
            CommandName.DELETE_LAST: self._delete_last,
        }

    async def handle(self, message: InboundMessage) -> Optional[str]:
        """
        Handle one inbound message.

        Returns:
            The reply text that was sent, or None if the message was ignored
        """
        if not message.is_actionable:
            return None

        owner_id = message.conversation_id
        text = message.normalized_text
        correlation_id = create_correlation_id()

        try:
            command = self._parser.parse(text)
        except UnknownCommandError as e:
            await self._audit_logger.log_command_unrecognized(
                owner_id=owner_id,
                word=e.word,
                correlation_id=correlation_id,
            )
            reply = self._formatter.error(e)
        except CommandError as e:
            await self._audit_logger.log_command_rejected(
                owner_id=owner_id,
                command=e.command.value if e.command else "",
                reason=e.message,
                correlation_id=correlation_id,
            )
            reply = self._formatter.error(e)
        else:
            if command is None:
                # Ordinary chat, not for us
                return None

            await self._audit_logger.log_message_received(
                owner_id=owner_id,
                text=text,
                correlation_id=correlation_id,
            )
            reply = await self._execute(owner_id, command, correlation_id)

        await self._send(owner_id, reply, correlation_id)
        return reply

    async def _execute(
        self,
        owner_id: str,
        command: ParsedCommand,
        correlation_id: UUID,
    ) -> str:
        handler = self._handlers[command.name]
        try:
            return await handler(owner_id, command, correlation_id)
        except Exception as e:
            logger.exception(
                "command_failed",
                command=command.name.value,
                owner_id=owner_id,
                correlation_id=str(correlation_id),
            )
            await self._audit_logger.log_error(
                error_type=type(e).__name__,
                error_message=str(e),
                owner_id=owner_id,
                details={"command": command.name.value},
                correlation_id=correlation_id,
            )
            return self._formatter.failure()

    async def _send(self, owner_id: str, reply: str, correlation_id: UUID) -> None:
        try:
            await self._channel.send_text(owner_id, reply)
        except Exception as e:
            logger.error(
                "reply_failed",
                owner_id=owner_id,
                error=str(e),
                correlation_id=str(correlation_id),
            )
            await self._audit_logger.log_reply_failed(
                owner_id=owner_id,
                error_message=str(e),
                correlation_id=correlation_id,
            )

    # -------------------------------------------------------------------------
    # Command handlers
    # -------------------------------------------------------------------------

    async def _help(self, owner_id: str, command: ParsedCommand, correlation_id: UUID) -> str:
        return self._formatter.help()

    async def _menu(self, owner_id: str, command: ParsedCommand, correlation_id: UUID) -> str:
        return self._formatter.menu()

    async def _record_income(
        self,
        owner_id: str,
        command: ParsedCommand,
        correlation_id: UUID,
    ) -> str:
        record = await self._operations.record_income(
            owner_id=owner_id,
            item=command.item,
            unit_price=command.amount,
            quantity=command.quantity,
        )
        await self._audit_logger.log_transaction_recorded(record, correlation_id)
        return self._formatter.recorded(record)

    async def _record_outgoing(
        self,
        owner_id: str,
        command: ParsedCommand,
        correlation_id: UUID,
    ) -> str:
        if command.name == CommandName.RECORD_PURCHASE:
            record_fn = self._operations.record_purchase
        else:
            record_fn = self._operations.record_expense

        record = await record_fn(
            owner_id=owner_id,
            item=command.item,
            amount=command.amount,
        )
        await self._audit_logger.log_transaction_recorded(record, correlation_id)
        return self._formatter.recorded(record)

    async def _delete_last(
        self,
        owner_id: str,
        command: ParsedCommand,
        correlation_id: UUID,
    ) -> str:
        result = await self._operations.delete_last(owner_id)
        if result.found:
            await self._audit_logger.log_transaction_deleted(result.deleted, correlation_id)
        return self._formatter.deleted(result)

    async def _profit_today(
        self,
        owner_id: str,
        command: ParsedCommand,
        correlation_id: UUID,
    ) -> str:
        summary = await self._operations.profit_today(owner_id)
        await self._audit_logger.log_report_generated(
            owner_id=owner_id,
            report_type="profit_today",
            transaction_count=summary.income_count + summary.outgoing_count,
            correlation_id=correlation_id,
        )
        return self._formatter.profit_summary(summary)

    async def _report(
        self,
        owner_id: str,
        command: ParsedCommand,
        correlation_id: UUID,
    ) -> str:
        report = await self._operations.report(owner_id, command.period)
        await self._audit_logger.log_report_generated(
            owner_id=owner_id,
            report_type=f"report_{report.period.value}",
            transaction_count=report.transaction_count,
            correlation_id=correlation_id,
        )
        return self._formatter.period_report(report)


def create_storage(
    backend: str,
) -> tuple[TransactionStorageInterface, AuditStorageInterface]:
    """
    Build the transaction and audit stores for a backend name.

    Falls back to in-memory storage when Google Sheets is not configured.
    """
    if backend == "sheets":
        try:
            sheets_client = GoogleSheetsClient()
            return (
                GoogleSheetsTransactionStorage(sheets_client),
                GoogleSheetsAuditStorage(sheets_client),
            )
        except Exception as e:
            # Storage not configured - continue in memory
            logger.warning("sheets_storage_unavailable", error=str(e))

    return InMemoryTransactionStorage(), InMemoryAuditStorage()


def create_app_components(
    channel: MessageChannel,
    storage_backend: Optional[str] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> MessageDispatcher:
    """
    Factory function to create all application components.

    Args:
        channel: Where replies are sent
        storage_backend: "sheets" or "memory"; defaults to the configured one
        clock: Current-time source (tests pin it)

    Returns:
        A ready-to-use message dispatcher
    """
    app = get_settings().app

    transaction_storage, audit_storage = create_storage(
        storage_backend or app.storage_backend
    )

    parser = CommandParser(prefix=app.command_prefix)
    operations = LedgerOperations(transaction_storage, tz=app.tzinfo, clock=clock)
    formatter = ReplyFormatter(
        parser=parser,
        tz=app.tzinfo,
        currency_label=app.currency_label,
        thousands_separator=app.thousands_separator,
        datetime_format=app.datetime_format,
        date_format=app.date_format,
        business_name=app.business_name,
    )

    return MessageDispatcher(
        parser=parser,
        operations=operations,
        formatter=formatter,
        channel=channel,
        audit_logger=AuditLogger(audit_storage),
    )
