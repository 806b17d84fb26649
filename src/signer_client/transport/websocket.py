"""WebSocket transport channel.

Full-duplex channel over a single WebSocket connection, built on the
``websockets`` library. Text frames are surfaced as TEXT messages, binary
frames as OTHER; ping/pong and close frames are handled by ``websockets``.
"""

from __future__ import annotations

import logging

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, WebSocketException

from ..config import SignerClientConfig
from .base import IncomingMessage, TransportError

logger = logging.getLogger(__name__)


class WebSocketChannel:
    """Client-side channel wrapping an open WebSocket connection.

    Use connect_websocket() to open one.
    """

    def __init__(self, websocket: ClientConnection, url: str | None = None):
        self._websocket = websocket
        self._url = url

    @property
    def url(self) -> str | None:
        return self._url

    async def send(self, text: str) -> None:
        """Send one text frame."""
        try:
            await self._websocket.send(text)
        except ConnectionClosed as e:
            raise TransportError(f"Connection closed while sending: {e}") from e
        except OSError as e:
            raise TransportError(f"Send failed: {e}") from e

    async def receive_next(self) -> IncomingMessage | None:
        """Wait for the next frame; None once the peer closed cleanly."""
        try:
            data = await self._websocket.recv()
        except ConnectionClosedOK:
            logger.info(f"WebSocket closed by peer: {self._url}")
            return None
        except ConnectionClosed as e:
            raise TransportError(f"Connection closed abnormally: {e}") from e
        except OSError as e:
            raise TransportError(f"Receive failed: {e}") from e

        if isinstance(data, str):
            return IncomingMessage.text(data)
        return IncomingMessage.binary(data)

    async def close(self) -> None:
        """Close the WebSocket connection."""
        await self._websocket.close()
        logger.info(f"WebSocket disconnected: {self._url}")


async def connect_websocket(config: SignerClientConfig | None = None) -> WebSocketChannel:
    """Open a WebSocket channel to the signer.

    Args:
        config: Connection settings (defaults to SignerClientConfig())

    Returns:
        A connected WebSocketChannel

    Raises:
        TransportError: If the connection cannot be established
    """
    config = config or SignerClientConfig()

    options: dict = {
        "open_timeout": config.open_timeout,
        "close_timeout": config.close_timeout,
        "ping_interval": config.ping_interval,
        "ping_timeout": config.ping_timeout,
        "max_size": config.max_size,
    }
    context = config.ssl_context()
    if context is not None:
        options["ssl"] = context

    try:
        websocket = await connect(config.url, **options)
    except (WebSocketException, OSError) as e:
        raise TransportError(f"Failed to connect to {config.url}: {e}") from e

    logger.info(f"WebSocket connected: {config.url}")
    return WebSocketChannel(websocket, url=config.url)
