"""Transport abstraction layer.

Provides the channel interface the client talks through:
- WebSocket - the signer's native transport (ws:// or wss://)
- Mock - in-memory channel for tests

The client only depends on TransportChannel, so channels can be swapped
without changing client code.
"""

from .base import IncomingMessage, MessageKind, TransportChannel, TransportError
from .mock import MockChannel
from .websocket import WebSocketChannel, connect_websocket

__all__ = [
    # Base abstractions
    "IncomingMessage",
    "MessageKind",
    "TransportChannel",
    "TransportError",
    # WebSocket implementation
    "WebSocketChannel",
    "connect_websocket",
    # Mock implementation
    "MockChannel",
]
