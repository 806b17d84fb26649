"""Wire protocol between the client and the signer.

Key concepts:
- Commands: fixed identifiers naming the signer operation to run
- Envelope: a command paired with its request payload
- Replies: a single JSON value per command, decoded by the caller
"""

from .commands import CommandType, Envelope, GetRequest

__all__ = [
    "CommandType",
    "Envelope",
    "GetRequest",
]
