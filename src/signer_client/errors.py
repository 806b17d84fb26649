"""Client error taxonomy.

Every failed exchange raises a single ClientError whose ``kind`` names
where the failure came from:

- INVALID_MESSAGE_FORMAT: the reply frame was not text
- END_OF_STREAM: the connection closed before a reply arrived
- SERIALIZATION: the request could not be encoded, or the reply could not
  be decoded into the expected type
- TRANSPORT: the underlying channel reported a failure

None of these are retried by the client.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Origin of a client failure."""

    INVALID_MESSAGE_FORMAT = "invalid_message_format"
    END_OF_STREAM = "end_of_stream"
    SERIALIZATION = "serialization"
    TRANSPORT = "transport"


_MESSAGES = {
    ErrorKind.INVALID_MESSAGE_FORMAT: "Received a non-text message from the signer",
    ErrorKind.END_OF_STREAM: "Signer connection closed while waiting for a reply",
    ErrorKind.SERIALIZATION: "Failed to encode or decode signer message",
    ErrorKind.TRANSPORT: "Signer transport error",
}


class ClientError(Exception):
    """A failed request/reply exchange with the signer.

    Attributes:
        kind: Which of the four failure origins this is
        cause: The underlying encoding, decoding or transport error, if any
    """

    def __init__(self, kind: ErrorKind, cause: BaseException | None = None):
        self.kind = kind
        self.cause = cause
        message = _MESSAGES[kind]
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)

    def __repr__(self) -> str:
        return f"ClientError(kind={self.kind.value!r}, cause={self.cause!r})"

    @classmethod
    def invalid_message_format(cls) -> ClientError:
        return cls(ErrorKind.INVALID_MESSAGE_FORMAT)

    @classmethod
    def end_of_stream(cls) -> ClientError:
        return cls(ErrorKind.END_OF_STREAM)

    @classmethod
    def serialization(cls, cause: BaseException) -> ClientError:
        return cls(ErrorKind.SERIALIZATION, cause)

    @classmethod
    def transport(cls, cause: BaseException) -> ClientError:
        return cls(ErrorKind.TRANSPORT, cause)

    @property
    def is_terminal(self) -> bool:
        """Whether the owning connection should be considered dead."""
        return self.kind in (ErrorKind.END_OF_STREAM, ErrorKind.TRANSPORT)
