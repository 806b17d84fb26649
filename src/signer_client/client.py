"""Signer command client.

Sends typed requests to the signer over a single channel and waits for the
single reply to each. Every operation is one exchange:

    {"command": "<id>", "request": <payload>}  ->  <reply for that command>

There are no request identifiers on the wire, so a reply always belongs to
the most recently sent request. Callers must not start a second exchange on
the same client before the first completes; use SerializedSignerClient when
several tasks share one connection.
"""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .config import SignerClientConfig
from .errors import ClientError
from .protocol.commands import CommandType, Envelope, GetRequest
from .signer.types import (
    Address,
    IdentityRequest,
    IdentityResponse,
    SignOutcome,
    SignRequest,
    SignWithTransactionDataResult,
    SyncOutcome,
    SyncRequest,
    TransactionDataRequest,
    TransactionDataResponse,
)
from .transport.base import TransportChannel, TransportError
from .transport.websocket import connect_websocket

logger = logging.getLogger(__name__)

R = TypeVar("R")


@lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


class SignerClient:
    """Client for the signer's command protocol.

    Usage:
        async with await SignerClient.connect("ws://127.0.0.1:29987") as client:
            address = await client.fetch_address()

        # Testing
        channel = MockChannel()
        client = SignerClient(channel)

    Once an exchange fails with END_OF_STREAM or TRANSPORT the connection is
    presumed dead and the client should be discarded.
    """

    def __init__(self, channel: TransportChannel):
        self._channel = channel

    @property
    def channel(self) -> TransportChannel:
        """Access the underlying channel."""
        return self._channel

    @classmethod
    async def connect(cls, target: str | SignerClientConfig | None = None) -> SignerClient:
        """Connect to a signer over WebSocket.

        Args:
            target: Signer URL or full configuration (defaults to SignerClientConfig())

        Raises:
            TransportError: If the connection cannot be established
        """
        config = SignerClientConfig(url=target) if isinstance(target, str) else target
        channel = await connect_websocket(config)
        return cls(channel)

    async def close(self) -> None:
        """Close the underlying channel."""
        await self._channel.close()

    async def __aenter__(self) -> SignerClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _exchange(
        self,
        command: CommandType,
        request: Any,
        response_type: type[R] | Any,
    ) -> R:
        """Send ``request`` tagged with ``command`` and decode the reply.

        Raises:
            ClientError: SERIALIZATION, TRANSPORT, INVALID_MESSAGE_FORMAT or END_OF_STREAM
        """
        try:
            text = Envelope.create(command, request).to_json()
        except PydanticSerializationError as e:
            raise ClientError.serialization(e) from e

        try:
            await self._channel.send(text)
            logger.debug(f"Sent {command.value} request ({len(text)} bytes)")
            message = await self._channel.receive_next()
        except TransportError as e:
            logger.warning(f"Transport error during {command.value}: {e}")
            raise ClientError.transport(e) from e

        if message is None:
            logger.warning(f"Signer closed the connection during {command.value}")
            raise ClientError.end_of_stream()
        if not message.is_text:
            logger.warning(f"Non-text reply to {command.value}: {message.kind.value}")
            raise ClientError.invalid_message_format()

        try:
            reply = _adapter(response_type).validate_json(message.data)
        except ValidationError as e:
            raise ClientError.serialization(e) from e

        logger.debug(f"Received {command.value} reply")
        return reply

    async def synchronize(self, request: SyncRequest) -> SyncOutcome:
        """Push new ledger data to the signer and get the balance update."""
        return await self._exchange(CommandType.SYNC, request, SyncOutcome)

    async def sign(self, request: SignRequest) -> SignOutcome:
        """Ask the signer to build and prove a transaction."""
        return await self._exchange(CommandType.SIGN, request, SignOutcome)

    async def fetch_address(self) -> Address | None:
        """Get the signer's receiving address, if it has one."""
        return await self._exchange(CommandType.ADDRESS, GetRequest.GET, Address | None)

    async def fetch_transaction_data(
        self, request: TransactionDataRequest
    ) -> TransactionDataResponse:
        """Get the raw transaction data behind a set of transfer posts."""
        return await self._exchange(
            CommandType.TRANSACTION_DATA, request, TransactionDataResponse
        )

    async def fetch_identity_proof(self, request: IdentityRequest) -> IdentityResponse:
        """Get identity proofs for a set of virtual assets."""
        return await self._exchange(CommandType.IDENTITY, request, IdentityResponse)

    async def sign_with_transaction_data(
        self, request: SignRequest
    ) -> SignWithTransactionDataResult:
        """Sign a transaction and return each post with its transaction data."""
        return await self._exchange(
            CommandType.SIGN_WITH_TRANSACTION_DATA, request, SignWithTransactionDataResult
        )


class SerializedSignerClient:
    """SignerClient wrapper that lets concurrent tasks share one connection.

    Each operation holds a lock for the whole exchange, so replies stay
    paired with their requests. The wire protocol is unchanged.
    """

    def __init__(self, client: SignerClient):
        self._client = client
        self._lock = asyncio.Lock()

    @property
    def client(self) -> SignerClient:
        return self._client

    async def close(self) -> None:
        async with self._lock:
            await self._client.close()

    async def __aenter__(self) -> SerializedSignerClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def synchronize(self, request: SyncRequest) -> SyncOutcome:
        async with self._lock:
            return await self._client.synchronize(request)

    async def sign(self, request: SignRequest) -> SignOutcome:
        async with self._lock:
            return await self._client.sign(request)

    async def fetch_address(self) -> Address | None:
        async with self._lock:
            return await self._client.fetch_address()

    async def fetch_transaction_data(
        self, request: TransactionDataRequest
    ) -> TransactionDataResponse:
        async with self._lock:
            return await self._client.fetch_transaction_data(request)

    async def fetch_identity_proof(self, request: IdentityRequest) -> IdentityResponse:
        async with self._lock:
            return await self._client.fetch_identity_proof(request)

    async def sign_with_transaction_data(
        self, request: SignRequest
    ) -> SignWithTransactionDataResult:
        async with self._lock:
            return await self._client.sign_with_transaction_data(request)
