# Core module - statuses, models, errors
from .states import ClaimStatus
from .models import Claim, ClaimCreate, VoteCast, DepositRequest, OwnerUpdate, AuditLogEntry
from .context import CallContext
from .errors import (
    LedgerError,
    ErrorCategory,
    InvalidAmountError,
    InvalidInputError,
    ClaimNotFoundError,
    ClaimNotPendingError,
    VotingClosedError,
    VotingStillOpenError,
    AlreadyVotedError,
    InsufficientFundsError,
    BalanceOverflowError,
    NotAuthorizedError,
)

__all__ = [
    "ClaimStatus",
    "Claim",
    "ClaimCreate",
    "VoteCast",
    "DepositRequest",
    "OwnerUpdate",
    "AuditLogEntry",
    "CallContext",
    "LedgerError",
    "ErrorCategory",
    "InvalidAmountError",
    "InvalidInputError",
    "ClaimNotFoundError",
    "ClaimNotPendingError",
    "VotingClosedError",
    "VotingStillOpenError",
    "AlreadyVotedError",
    "InsufficientFundsError",
    "BalanceOverflowError",
    "NotAuthorizedError",
]
