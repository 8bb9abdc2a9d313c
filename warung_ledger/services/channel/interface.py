"""
Messaging Channel Interface

The ledger talks to the outside world through exactly two things:
1. An inbound message (who sent it, what it says)
2. send_text(conversation_id, text)

Connection handling, pairing and reconnects belong to the concrete
channel, not to the ledger.

DESIGN DECISION: Chat payloads come in several shapes (plain text,
extended text with link previews, images with captions, stickers...).
The shape is resolved once, here, into a single normalized text so the
command parser never looks at payload structure.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class MessageKind(str, Enum):
    """Shapes of inbound chat payloads."""
    PLAIN_TEXT = "plain_text"
    EXTENDED_TEXT = "extended_text"
    CAPTIONED_MEDIA = "captioned_media"
    OTHER = "other"


class InboundMessage(BaseModel):
    """A message delivered by the channel."""

    conversation_id: str = Field(
        ...,
        min_length=1,
        description="Sender/conversation id; also the ledger owner"
    )
    kind: MessageKind = Field(
        default=MessageKind.PLAIN_TEXT,
        description="Payload shape"
    )
    text: Optional[str] = Field(
        default=None,
        description="Body for plain and extended text messages"
    )
    caption: Optional[str] = Field(
        default=None,
        description="Caption for media messages"
    )
    from_self: bool = Field(
        default=False,
        description="Sent by the bot's own account"
    )

    @property
    def normalized_text(self) -> str:
        """Resolve the payload to the text the parser should see."""
        if self.kind in (MessageKind.PLAIN_TEXT, MessageKind.EXTENDED_TEXT):
            return (self.text or "").strip()
        if self.kind == MessageKind.CAPTIONED_MEDIA:
            return (self.caption or "").strip()
        return ""

    @property
    def is_actionable(self) -> bool:
        """Messages from ourselves or without text are never handled."""
        return not self.from_self and bool(self.normalized_text)


class MessageChannel(ABC):
    """Outbound half of a messaging channel."""

    @abstractmethod
    async def send_text(self, conversation_id: str, text: str) -> None:
        """
        Send a text reply to a conversation.

        Raises:
            ChannelError: If the message could not be delivered
        """
        pass


class ChannelError(Exception):
    """A channel call failed."""
    pass
