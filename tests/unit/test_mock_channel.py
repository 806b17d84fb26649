"""Unit tests for the in-memory mock channel."""

import json

import pytest

from samples import ADDRESS
from signer_client.transport.base import IncomingMessage, MessageKind, TransportChannel, TransportError
from signer_client.transport.mock import MockChannel


class TestMockChannel:
    def test_satisfies_protocol(self, channel: MockChannel) -> None:
        assert isinstance(channel, TransportChannel)

    @pytest.mark.anyio
    async def test_records_frames(self, channel: MockChannel) -> None:
        await channel.send('{"command": "sync", "request": {}}')
        await channel.send("raw text")

        assert channel.recorded_frames == ['{"command": "sync", "request": {}}', "raw text"]

    @pytest.mark.anyio
    async def test_canned_model_reply_is_json_text(self, channel: MockChannel) -> None:
        channel.set_response("address", ADDRESS)

        await channel.send(json.dumps({"command": "address", "request": "Get"}))
        message = await channel.receive_next()

        assert message is not None
        assert message.kind == MessageKind.TEXT
        assert json.loads(message.data) == {"receiving_key": ADDRESS.receiving_key}

    @pytest.mark.anyio
    async def test_responder(self) -> None:
        """The responder sees the command and request payload."""
        seen = []

        def responder(command, request):
            seen.append((command, request))
            return {"echo": request}

        channel = MockChannel(responder=responder)
        await channel.send(json.dumps({"command": "sign", "request": {"a": 1}}))
        message = await channel.receive_next()

        assert seen == [("sign", {"a": 1})]
        assert message is not None
        assert json.loads(message.data) == {"echo": {"a": 1}}

    @pytest.mark.anyio
    async def test_bytes_reply_is_other(self, channel: MockChannel) -> None:
        channel.inject(b"\x01\x02")

        message = await channel.receive_next()

        assert message == IncomingMessage(kind=MessageKind.OTHER, data=b"\x01\x02")
        assert not message.is_text

    @pytest.mark.anyio
    async def test_end_stream(self, channel: MockChannel) -> None:
        channel.end_stream()

        assert await channel.receive_next() is None

    @pytest.mark.anyio
    async def test_fail_receive(self, channel: MockChannel) -> None:
        channel.fail_receive(TransportError("gone"))

        with pytest.raises(TransportError, match="gone"):
            await channel.receive_next()

    @pytest.mark.anyio
    async def test_fail_send_and_restore(self, channel: MockChannel) -> None:
        channel.fail_send(TransportError("down"))
        with pytest.raises(TransportError):
            await channel.send("x")

        channel.fail_send(None)
        await channel.send("y")

        assert channel.recorded_frames == ["y"]

    @pytest.mark.anyio
    async def test_closed_channel(self, channel: MockChannel) -> None:
        await channel.close()
        await channel.close()

        assert channel.is_closed
        assert await channel.receive_next() is None
        assert await channel.receive_next() is None
        with pytest.raises(TransportError):
            await channel.send("x")

    @pytest.mark.anyio
    async def test_clear(self, channel: MockChannel) -> None:
        channel.set_response("address", ADDRESS)
        await channel.send(json.dumps({"command": "address", "request": "Get"}))

        channel.clear()
        await channel.send(json.dumps({"command": "address", "request": "Get"}))
        channel.end_stream()

        assert len(channel.recorded_frames) == 1
        assert await channel.receive_next() is None
