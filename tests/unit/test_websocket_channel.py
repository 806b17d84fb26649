"""Unit tests for the WebSocket channel.

Tests the channel against a mocked websockets connection:
- Frame type mapping (text vs binary)
- Close and error mapping
- Connection factory options
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from websockets.exceptions import ConnectionClosedError, ConnectionClosedOK, InvalidURI
from websockets.frames import Close

from signer_client.config import SignerClientConfig
from signer_client.transport.base import MessageKind, TransportChannel, TransportError
from signer_client.transport.websocket import WebSocketChannel, connect_websocket

# =============================================================================
# Helpers
# =============================================================================


def closed_ok() -> ConnectionClosedOK:
    return ConnectionClosedOK(Close(1000, ""), Close(1000, ""), True)


def closed_error() -> ConnectionClosedError:
    return ConnectionClosedError(None, None)


def make_websocket() -> MagicMock:
    mock_ws = MagicMock()
    mock_ws.send = AsyncMock()
    mock_ws.recv = AsyncMock()
    mock_ws.close = AsyncMock()
    return mock_ws


# =============================================================================
# WebSocketChannel Tests
# =============================================================================


class TestWebSocketChannel:
    """Tests for the channel wrapper."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(WebSocketChannel(make_websocket()), TransportChannel)

    @pytest.mark.anyio
    async def test_send_text(self) -> None:
        mock_ws = make_websocket()
        channel = WebSocketChannel(mock_ws)

        await channel.send('{"command": "address", "request": "Get"}')

        mock_ws.send.assert_awaited_once_with('{"command": "address", "request": "Get"}')

    @pytest.mark.anyio
    async def test_send_on_closed_connection(self) -> None:
        mock_ws = make_websocket()
        mock_ws.send.side_effect = closed_error()

        with pytest.raises(TransportError) as exc_info:
            await WebSocketChannel(mock_ws).send("x")

        assert isinstance(exc_info.value.__cause__, ConnectionClosedError)

    @pytest.mark.anyio
    async def test_send_os_error(self) -> None:
        mock_ws = make_websocket()
        mock_ws.send.side_effect = ConnectionResetError("reset")

        with pytest.raises(TransportError, match="reset"):
            await WebSocketChannel(mock_ws).send("x")

    @pytest.mark.anyio
    async def test_text_frame(self) -> None:
        mock_ws = make_websocket()
        mock_ws.recv.return_value = '{"data": []}'

        message = await WebSocketChannel(mock_ws).receive_next()

        assert message is not None
        assert message.kind == MessageKind.TEXT
        assert message.data == '{"data": []}'

    @pytest.mark.anyio
    async def test_binary_frame(self) -> None:
        mock_ws = make_websocket()
        mock_ws.recv.return_value = b'{"data": []}'

        message = await WebSocketChannel(mock_ws).receive_next()

        assert message is not None
        assert message.kind == MessageKind.OTHER

    @pytest.mark.anyio
    async def test_clean_close_is_end_of_stream(self) -> None:
        mock_ws = make_websocket()
        mock_ws.recv.side_effect = closed_ok()

        assert await WebSocketChannel(mock_ws).receive_next() is None

    @pytest.mark.anyio
    async def test_abnormal_close_is_transport_error(self) -> None:
        mock_ws = make_websocket()
        mock_ws.recv.side_effect = closed_error()

        with pytest.raises(TransportError, match="abnormally"):
            await WebSocketChannel(mock_ws).receive_next()

    @pytest.mark.anyio
    async def test_close(self) -> None:
        mock_ws = make_websocket()

        await WebSocketChannel(mock_ws, url="ws://localhost:1").close()

        mock_ws.close.assert_awaited_once()


# =============================================================================
# connect_websocket Tests
# =============================================================================


class TestConnectWebSocket:
    """Tests for the connection factory."""

    @pytest.mark.anyio
    async def test_plain_connection_options(self) -> None:
        mock_ws = make_websocket()
        config = SignerClientConfig(url="ws://localhost:1234", ping_interval=None, max_size=2048)

        with patch(
            "signer_client.transport.websocket.connect", AsyncMock(return_value=mock_ws)
        ) as mock_connect:
            channel = await connect_websocket(config)

        mock_connect.assert_awaited_once()
        args, kwargs = mock_connect.call_args
        assert args == ("ws://localhost:1234",)
        assert kwargs["ping_interval"] is None
        assert kwargs["max_size"] == 2048
        assert kwargs["open_timeout"] == config.open_timeout
        assert "ssl" not in kwargs
        assert channel.url == "ws://localhost:1234"

    @pytest.mark.anyio
    async def test_secure_connection_passes_ssl_context(self) -> None:
        config = SignerClientConfig(url="wss://localhost:1234")

        with patch(
            "signer_client.transport.websocket.connect",
            AsyncMock(return_value=make_websocket()),
        ) as mock_connect:
            await connect_websocket(config)

        assert mock_connect.call_args.kwargs["ssl"] is not None

    @pytest.mark.anyio
    async def test_default_config(self) -> None:
        with patch(
            "signer_client.transport.websocket.connect",
            AsyncMock(return_value=make_websocket()),
        ) as mock_connect:
            await connect_websocket()

        assert mock_connect.call_args.args == ("ws://127.0.0.1:29987",)

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "error",
        [ConnectionRefusedError("refused"), TimeoutError(), InvalidURI("nope", "not a ws uri")],
    )
    async def test_connect_failures(self, error: Exception) -> None:
        with patch(
            "signer_client.transport.websocket.connect", AsyncMock(side_effect=error)
        ):
            with pytest.raises(TransportError, match="Failed to connect"):
                await connect_websocket(SignerClientConfig(url="ws://localhost:1"))
