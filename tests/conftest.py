"""
Shared fixtures.

No network: storage is in memory, the channel records what it is asked
to send, and time is pinned to a fixed moment in the stall's timezone.
"""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from warung_ledger.audit import AuditLogger
from warung_ledger.commands import CommandParser
from warung_ledger.formatting import ReplyFormatter
from warung_ledger.ledger import LedgerOperations
from warung_ledger.orchestrator import MessageDispatcher
from warung_ledger.services.channel import MessageChannel
from warung_ledger.services.storage import InMemoryAuditStorage, InMemoryTransactionStorage


JAKARTA = ZoneInfo("Asia/Jakarta")


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingChannel(MessageChannel):
    """Channel that keeps every reply it was asked to send."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    async def send_text(self, conversation_id: str, text: str) -> None:
        self.sent.append((conversation_id, text))


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 19, 14, 30, tzinfo=JAKARTA))


@pytest.fixture
def storage():
    return InMemoryTransactionStorage()


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def operations(storage, clock):
    return LedgerOperations(storage, tz=JAKARTA, clock=clock)


@pytest.fixture
def parser():
    return CommandParser(prefix="/")


@pytest.fixture
def formatter(parser):
    return ReplyFormatter(parser=parser, tz=JAKARTA)


@pytest.fixture
def channel():
    return RecordingChannel()


@pytest.fixture
def dispatcher(parser, operations, formatter, channel, audit_storage):
    return MessageDispatcher(
        parser=parser,
        operations=operations,
        formatter=formatter,
        channel=channel,
        audit_logger=AuditLogger(audit_storage),
    )
