"""Mock transport channel for testing.

No actual I/O - everything is in-memory.

Usage:
    channel = MockChannel()
    channel.set_response("address", Address(receiving_key="ab" * 32))

    client = SignerClient(channel)
    address = await client.fetch_address()

    assert channel.recorded_commands[0]["command"] == "address"
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from typing import Any

from pydantic_core import to_json

from .base import IncomingMessage, TransportError

# A canned reply: raw text (sent verbatim), a prepared message, or any value
# pydantic can serialize (encoded to JSON text).
Reply = Any
Responder = Callable[[str, Any], Reply]

_END_OF_STREAM = object()


def _to_message(reply: Reply) -> IncomingMessage:
    if isinstance(reply, IncomingMessage):
        return reply
    if isinstance(reply, bytes):
        return IncomingMessage.binary(reply)
    if isinstance(reply, str):
        return IncomingMessage.text(reply)
    return IncomingMessage.text(to_json(reply).decode("utf-8"))


class MockChannel:
    """In-memory channel that records outbound frames and plays back replies.

    Replies are looked up per command on every send. Commands without a canned
    reply (and no responder) get nothing back; use inject() or end_stream()
    to control what the next receive sees.
    """

    def __init__(self, responder: Responder | None = None) -> None:
        self._responder = responder
        self._responses: dict[str, Reply] = {}
        self._recorded_frames: list[str] = []
        self._inbox: asyncio.Queue[Any] = asyncio.Queue()
        self._send_error: TransportError | None = None
        self._closed = False

    @property
    def recorded_frames(self) -> list[str]:
        """Raw text of every frame sent through this channel."""
        return self._recorded_frames.copy()

    @property
    def recorded_commands(self) -> list[dict[str, Any]]:
        """Every sent frame decoded as JSON."""
        return [json.loads(frame) for frame in self._recorded_frames]

    @property
    def is_closed(self) -> bool:
        return self._closed

    def set_response(self, command: str, reply: Reply) -> None:
        """Set the canned reply for a command identifier."""
        self._responses[command] = reply

    def inject(self, reply: Reply) -> None:
        """Queue an inbound message independent of any send."""
        self._inbox.put_nowait(_to_message(reply))

    def end_stream(self) -> None:
        """Make the next receive report end of stream."""
        self._inbox.put_nowait(_END_OF_STREAM)

    def fail_receive(self, error: TransportError) -> None:
        """Make the next receive raise a transport error."""
        self._inbox.put_nowait(error)

    def fail_send(self, error: TransportError | None) -> None:
        """Make every following send raise; None restores normal sends."""
        self._send_error = error

    def clear(self) -> None:
        """Clear recorded frames, canned replies and queued messages."""
        self._recorded_frames.clear()
        self._responses.clear()
        while not self._inbox.empty():
            self._inbox.get_nowait()

    async def send(self, text: str) -> None:
        """Record the frame and queue the canned reply for its command."""
        if self._closed:
            raise TransportError("Channel is closed")
        if self._send_error is not None:
            raise self._send_error

        self._recorded_frames.append(text)

        try:
            frame = json.loads(text)
        except json.JSONDecodeError:
            return
        if not isinstance(frame, dict):
            return
        command = frame.get("command")

        if command in self._responses:
            self._inbox.put_nowait(_to_message(self._responses[command]))
        elif self._responder is not None:
            reply = self._responder(command, frame.get("request"))
            if reply is not None:
                self._inbox.put_nowait(_to_message(reply))

    async def receive_next(self) -> IncomingMessage | None:
        """Return the next queued message, waiting if none is queued yet."""
        if self._closed and self._inbox.empty():
            return None

        item = await self._inbox.get()
        if item is _END_OF_STREAM:
            return None
        if isinstance(item, TransportError):
            raise item
        return item

    async def close(self) -> None:
        """Close the channel; a pending receive sees end of stream."""
        if not self._closed:
            self._closed = True
            self._inbox.put_nowait(_END_OF_STREAM)
