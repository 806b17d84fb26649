"""Command definitions for the signer protocol.

Every request sent to the signer is wrapped in an Envelope that names the
command to run. The signer decodes the envelope strictly, so it carries
exactly two fields:

    {
        "command": "sync",
        "request": {...}
    }

Replies carry no command tag; their shape is determined by the command sent.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class CommandType(str, Enum):
    """All supported signer commands."""

    SYNC = "sync"
    SIGN = "sign"
    ADDRESS = "address"
    TRANSACTION_DATA = "transaction_data"
    IDENTITY = "identity"
    SIGN_WITH_TRANSACTION_DATA = "sign_with_transaction_data"


class GetRequest(str, Enum):
    """Payload for commands that take no parameters."""

    GET = "Get"


class Envelope(BaseModel):
    """A command and its request payload, as sent over the wire."""

    model_config = ConfigDict(extra="forbid")

    command: str
    request: Any

    @classmethod
    def create(cls, command: str | CommandType, request: Any) -> Envelope:
        """Factory method accepting either a CommandType or a raw identifier."""
        return cls(
            command=command.value if isinstance(command, CommandType) else command,
            request=request,
        )

    def to_json(self) -> str:
        """Serialize to JSON text.

        Raises:
            pydantic_core.PydanticSerializationError: If the payload cannot be encoded
        """
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: str | bytes) -> Envelope:
        """Deserialize from JSON text (used by signer-side code and tests)."""
        return cls.model_validate_json(data)
