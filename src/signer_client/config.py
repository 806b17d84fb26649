"""Client configuration.

Defaults target a signer running locally. Every field can be overridden
through SIGNER_CLIENT_* environment variables via SignerClientConfig.from_env().
"""

from __future__ import annotations

import os
import ssl
from dataclasses import dataclass, fields
from typing import Any

DEFAULT_URL = "ws://127.0.0.1:29987"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_float(name: str) -> float | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e


def _env_int(name: str) -> int | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


@dataclass
class SignerClientConfig:
    """Connection settings for the signer WebSocket."""

    url: str = DEFAULT_URL

    # Connection lifecycle (seconds)
    open_timeout: float = 10.0
    close_timeout: float = 10.0

    # Keep-alive; None disables pings
    ping_interval: float | None = 20.0
    ping_timeout: float | None = 20.0

    # Largest accepted inbound frame in bytes; None for unlimited
    max_size: int | None = 16 * 1024 * 1024

    # TLS (wss:// only)
    verify_tls: bool = True
    ca_file: str | None = None

    @property
    def is_secure(self) -> bool:
        return self.url.startswith("wss://")

    def ssl_context(self) -> ssl.SSLContext | None:
        """Build the SSL context for the connection.

        Returns None for plain ws:// URLs.
        """
        if not self.is_secure:
            return None

        context = ssl.create_default_context(cafile=self.ca_file)
        if not self.verify_tls:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context

    @classmethod
    def from_env(cls, **overrides: Any) -> SignerClientConfig:
        """Load configuration from the environment.

        Keyword overrides win over environment values; None overrides are ignored.
        """
        values: dict[str, Any] = {}

        if url := os.getenv("SIGNER_CLIENT_URL"):
            values["url"] = url
        if (open_timeout := _env_float("SIGNER_CLIENT_OPEN_TIMEOUT")) is not None:
            values["open_timeout"] = open_timeout
        if (ping_interval := _env_float("SIGNER_CLIENT_PING_INTERVAL")) is not None:
            values["ping_interval"] = ping_interval if ping_interval > 0 else None
        if (max_size := _env_int("SIGNER_CLIENT_MAX_SIZE")) is not None:
            values["max_size"] = max_size if max_size > 0 else None
        verify = os.getenv("SIGNER_CLIENT_VERIFY_TLS")
        if verify is not None and verify != "":
            values["verify_tls"] = verify.lower() in _TRUE_VALUES
        if ca_file := os.getenv("SIGNER_CLIENT_CA_FILE"):
            values["ca_file"] = ca_file

        known = {f.name for f in fields(cls)}
        for key, value in overrides.items():
            if key not in known:
                raise TypeError(f"Unknown config option: {key}")
            if value is not None:
                values[key] = value

        return cls(**values)
