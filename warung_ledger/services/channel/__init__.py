"""Messaging channel package."""

from warung_ledger.services.channel.interface import (
    ChannelError,
    InboundMessage,
    MessageChannel,
    MessageKind,
)

__all__ = [
    "ChannelError",
    "InboundMessage",
    "MessageChannel",
    "MessageKind",
]
