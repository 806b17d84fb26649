"""Pytest configuration and shared fixtures."""

import pytest

from signer_client.client import SignerClient
from signer_client.transport.mock import MockChannel


@pytest.fixture(scope="module")
def anyio_backend():
    """Configure anyio to use asyncio backend."""
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_signer_env(monkeypatch):
    """Keep SIGNER_CLIENT_* variables from the host out of tests."""
    for name in (
        "SIGNER_CLIENT_URL",
        "SIGNER_CLIENT_OPEN_TIMEOUT",
        "SIGNER_CLIENT_PING_INTERVAL",
        "SIGNER_CLIENT_MAX_SIZE",
        "SIGNER_CLIENT_VERIFY_TLS",
        "SIGNER_CLIENT_CA_FILE",
        "SIGNER_CLIENT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def channel() -> MockChannel:
    """A fresh in-memory channel."""
    return MockChannel()


@pytest.fixture
def client(channel: MockChannel) -> SignerClient:
    """A client wired to the mock channel."""
    return SignerClient(channel)
