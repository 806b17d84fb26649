"""Transport channel abstraction.

A channel is a bidirectional message stream over one connection:
- send(text): transmit a single text message
- receive_next(): wait for the next inbound message, or None at end of stream

Channels report failures as TransportError. They do not interpret message
contents; framing into commands and replies is the client's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class TransportError(Exception):
    """The underlying connection failed (network, handshake, abnormal close)."""


class MessageKind(str, Enum):
    """Kinds of inbound messages a channel can yield."""

    TEXT = "text"
    OTHER = "other"  # Binary or any other non-text frame


@dataclass(frozen=True)
class IncomingMessage:
    """One inbound message from the channel."""

    kind: MessageKind
    data: str | bytes

    @property
    def is_text(self) -> bool:
        return self.kind == MessageKind.TEXT

    @classmethod
    def text(cls, data: str) -> IncomingMessage:
        return cls(kind=MessageKind.TEXT, data=data)

    @classmethod
    def binary(cls, data: bytes) -> IncomingMessage:
        return cls(kind=MessageKind.OTHER, data=data)


@runtime_checkable
class TransportChannel(Protocol):
    """Protocol for message channels consumed by SignerClient."""

    async def send(self, text: str) -> None:
        """Send one text message.

        Raises:
            TransportError: If the connection cannot accept the message
        """
        ...

    async def receive_next(self) -> IncomingMessage | None:
        """Wait for the next inbound message.

        Returns:
            The next message, or None once the connection has closed

        Raises:
            TransportError: If the connection failed
        """
        ...

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        ...
