"""Signer request and reply types."""

from .types import (
    Address,
    Asset,
    AssetMetadata,
    BalanceUpdate,
    Checkpoint,
    IdentityProof,
    IdentityRequest,
    IdentityResponse,
    Outcome,
    PostWithData,
    SignError,
    SignErrorKind,
    SignOutcome,
    SignRequest,
    SignResponse,
    SignWithTransactionDataResponse,
    SignWithTransactionDataResult,
    SyncError,
    SyncOutcome,
    SyncRequest,
    SyncResponse,
    Transaction,
    TransactionDataRequest,
    TransactionDataResponse,
    TransactionKind,
    TransferPost,
    VirtualAsset,
)

__all__ = [
    "Address",
    "Asset",
    "AssetMetadata",
    "BalanceUpdate",
    "Checkpoint",
    "IdentityProof",
    "IdentityRequest",
    "IdentityResponse",
    "Outcome",
    "PostWithData",
    "SignError",
    "SignErrorKind",
    "SignOutcome",
    "SignRequest",
    "SignResponse",
    "SignWithTransactionDataResponse",
    "SignWithTransactionDataResult",
    "SyncError",
    "SyncOutcome",
    "SyncRequest",
    "SyncResponse",
    "Transaction",
    "TransactionDataRequest",
    "TransactionDataResponse",
    "TransactionKind",
    "TransferPost",
    "VirtualAsset",
]
