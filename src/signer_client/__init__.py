"""Signer client - typed request/reply client for a remote signer.

Talks to the signer over one long-lived WebSocket connection, one exchange
at a time:

    async with await SignerClient.connect("ws://127.0.0.1:29987") as client:
        outcome = await client.synchronize(request)

Channels:
- WebSocketChannel: the signer's native transport
- MockChannel: in-memory channel for tests
"""

from .client import SerializedSignerClient, SignerClient
from .config import SignerClientConfig
from .errors import ClientError, ErrorKind
from .protocol import CommandType, Envelope, GetRequest
from .transport import (
    IncomingMessage,
    MessageKind,
    MockChannel,
    TransportChannel,
    TransportError,
    WebSocketChannel,
    connect_websocket,
)

__all__ = [
    # Client
    "SignerClient",
    "SerializedSignerClient",
    "SignerClientConfig",
    # Errors
    "ClientError",
    "ErrorKind",
    "TransportError",
    # Protocol
    "CommandType",
    "Envelope",
    "GetRequest",
    # Transport
    "IncomingMessage",
    "MessageKind",
    "TransportChannel",
    "WebSocketChannel",
    "MockChannel",
    "connect_websocket",
]
