"""Signer request and reply types.

These are the values the wallet exchanges with the signer. The client only
encodes requests and decodes replies; it never inspects them. All models
reject unknown fields so a reply meant for another command fails to decode
instead of silently producing defaults.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")
E = TypeVar("E")

# Hex-encoded bytes; even length, no prefix
HexBytes = Annotated[str, Field(pattern=r"^([0-9a-fA-F]{2})*$")]


class SignerModel(BaseModel):
    """Base for all signer wire types."""

    model_config = ConfigDict(extra="forbid")


class Outcome(SignerModel, Generic[T, E]):
    """Success or failure reported by the signer itself.

    Exactly one side is set. On the wire the keys are capitalized:
        {"Ok": {...}}  or  {"Err": {...}}
    """

    model_config = ConfigDict(validate_by_name=True, serialize_by_alias=True)

    ok: T | None = Field(default=None, alias="Ok")
    err: E | None = Field(default=None, alias="Err")

    @model_validator(mode="after")
    def _exactly_one(self) -> Outcome[T, E]:
        if (self.ok is None) == (self.err is None):
            raise ValueError("Outcome requires exactly one of 'Ok' or 'Err'")
        return self

    @property
    def is_ok(self) -> bool:
        return self.ok is not None

    def unwrap(self) -> T:
        """Return the success value, raising ValueError on failure."""
        if self.ok is None:
            raise ValueError(f"Signer returned an error: {self.err}")
        return self.ok


# =============================================================================
# Shared values
# =============================================================================


class Asset(SignerModel):
    """An amount of a single asset."""

    id: str
    value: int = Field(ge=0)


class AssetMetadata(SignerModel):
    """Display metadata for an asset."""

    decimals: int = Field(ge=0)
    symbol: str


class Checkpoint(SignerModel):
    """Position of the signer in the ledger."""

    receiver_index: list[int] = Field(default_factory=list)
    sender_index: int = 0


class Address(SignerModel):
    """A shielded receiving address (hex-encoded key)."""

    receiving_key: str = Field(min_length=1)


class TransferPost(SignerModel):
    """A signed transfer ready to be posted to the ledger."""

    asset_id: str | None = None
    sources: list[int] = Field(default_factory=list)
    sender_posts: list[str] = Field(default_factory=list)
    receiver_posts: list[str] = Field(default_factory=list)
    sinks: list[int] = Field(default_factory=list)
    proof: str


# =============================================================================
# sync
# =============================================================================


class SyncRequest(SignerModel):
    """New ledger data since the signer's last checkpoint."""

    origin_checkpoint: Checkpoint
    utxo_note_data: list[str] = Field(default_factory=list)
    nullifier_data: list[str] = Field(default_factory=list)


class BalanceUpdate(SignerModel):
    """Balance changes discovered during a sync."""

    deposit: list[Asset] = Field(default_factory=list)
    withdraw: list[Asset] = Field(default_factory=list)


class SyncResponse(SignerModel):
    checkpoint: Checkpoint
    balance_update: BalanceUpdate


class SyncError(SignerModel):
    """The signer's checkpoint does not match the request's origin."""

    kind: Literal["inconsistent_synchronization"] = "inconsistent_synchronization"
    checkpoint: Checkpoint


# =============================================================================
# sign
# =============================================================================


class TransactionKind(str, Enum):
    TO_PRIVATE = "to_private"
    PRIVATE_TRANSFER = "private_transfer"
    TO_PUBLIC = "to_public"


class Transaction(SignerModel):
    """A transaction for the signer to build and prove."""

    kind: TransactionKind
    asset: Asset
    receiver: Address | None = None

    @model_validator(mode="after")
    def _check_receiver(self) -> Transaction:
        needs_receiver = self.kind == TransactionKind.PRIVATE_TRANSFER
        if needs_receiver and self.receiver is None:
            raise ValueError("private_transfer requires a receiver")
        if not needs_receiver and self.receiver is not None:
            raise ValueError(f"{self.kind.value} does not take a receiver")
        return self


class SignRequest(SignerModel):
    transaction: Transaction
    metadata: AssetMetadata | None = None


class SignResponse(SignerModel):
    posts: list[TransferPost]


class SignErrorKind(str, Enum):
    INSUFFICIENT_BALANCE = "insufficient_balance"
    PROOF_SYSTEM_ERROR = "proof_system_error"


class SignError(SignerModel):
    kind: SignErrorKind
    asset: Asset | None = None
    detail: str | None = None


# =============================================================================
# transaction_data
# =============================================================================


class TransactionDataRequest(SignerModel):
    posts: list[TransferPost]


class TransactionDataResponse(SignerModel):
    """Raw transaction data per requested post, hex-encoded.

    An entry is None when the post does not belong to this signer.
    """

    data: list[HexBytes | None]

    def raw(self, index: int) -> bytes | None:
        """Decoded bytes for the post at ``index``."""
        entry = self.data[index]
        return None if entry is None else bytes.fromhex(entry)


# =============================================================================
# identity
# =============================================================================


class VirtualAsset(SignerModel):
    """An asset bound to an identifier, used to prove account ownership."""

    identifier: str
    asset: Asset


class IdentityRequest(SignerModel):
    virtual_assets: list[VirtualAsset]


class IdentityProof(SignerModel):
    transfer_post: TransferPost


class IdentityResponse(SignerModel):
    """One proof per requested virtual asset; None if it could not be proven."""

    proofs: list[IdentityProof | None]


# =============================================================================
# sign_with_transaction_data
# =============================================================================


class PostWithData(SignerModel):
    post: TransferPost
    transaction_data: HexBytes


class SignWithTransactionDataResponse(SignerModel):
    posts: list[PostWithData]


SyncOutcome = Outcome[SyncResponse, SyncError]
SignOutcome = Outcome[SignResponse, SignError]
SignWithTransactionDataResult = Outcome[SignWithTransactionDataResponse, SignError]
