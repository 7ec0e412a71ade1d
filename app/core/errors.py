"""
Ledger Error Hierarchy

Typed exceptions for every rejected ledger operation. Each error carries
the ERR-* code of the original DAO contract, a category and the HTTP
status the API layer answers with.
"""
from enum import Enum


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    BUSINESS_RULE = "business_rule"
    AUTHORIZATION = "authorization"
    INTERNAL = "internal"


class LedgerError(Exception):
    """Base exception for all ledger failures."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 400,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
            }
        }


# ─── Validation (400) ───────────────────────────────────────────

class InvalidAmountError(LedgerError):
    """Amount is zero, negative or otherwise unusable."""
    def __init__(self, amount: int):
        super().__init__(
            f"Amount must be a positive integer, got {amount}",
            "ERR-INVALID-AMOUNT", ErrorCategory.VALIDATION, 400,
        )
        self.amount = amount


class InvalidInputError(LedgerError):
    """Text field or principal violates its constraints."""
    def __init__(self, message: str, field: str):
        super().__init__(
            message, "ERR-INVALID-INPUT", ErrorCategory.VALIDATION, 400,
        )
        self.field = field


# ─── Lookup (404) ───────────────────────────────────────────────

class ClaimNotFoundError(LedgerError):
    def __init__(self, claim_id: int):
        super().__init__(
            f"Claim {claim_id} not found",
            "ERR-CLAIM-NOT-FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404,
        )
        self.claim_id = claim_id


# ─── Business rules (409) ───────────────────────────────────────

class ClaimNotPendingError(LedgerError):
    def __init__(self, claim_id: int, status: str):
        super().__init__(
            f"Claim {claim_id} is already {status}",
            "ERR-CLAIM-NOT-PENDING", ErrorCategory.BUSINESS_RULE, 409,
        )
        self.claim_id = claim_id
        self.status = status


class VotingClosedError(LedgerError):
    def __init__(self, claim_id: int, voting_deadline: int, block_height: int):
        super().__init__(
            f"Voting on claim {claim_id} closed at block {voting_deadline} "
            f"(current block {block_height})",
            "ERR-VOTING-CLOSED", ErrorCategory.BUSINESS_RULE, 409,
        )
        self.claim_id = claim_id


class VotingStillOpenError(LedgerError):
    def __init__(self, claim_id: int, voting_deadline: int, block_height: int):
        super().__init__(
            f"Claim {claim_id} cannot be finalized before block "
            f"{voting_deadline + 1} (current block {block_height})",
            "ERR-VOTING-STILL-OPEN", ErrorCategory.BUSINESS_RULE, 409,
        )
        self.claim_id = claim_id


class AlreadyVotedError(LedgerError):
    def __init__(self, claim_id: int, voter: str):
        super().__init__(
            f"{voter} has already voted on claim {claim_id}",
            "ERR-ALREADY-VOTED", ErrorCategory.BUSINESS_RULE, 409,
        )
        self.claim_id = claim_id
        self.voter = voter


class InsufficientFundsError(LedgerError):
    def __init__(self, requested: int, balance: int):
        super().__init__(
            f"Fund balance {balance} cannot cover {requested}",
            "ERR-INSUFFICIENT-FUNDS", ErrorCategory.BUSINESS_RULE, 409,
        )
        self.requested = requested
        self.balance = balance


class BalanceOverflowError(LedgerError):
    def __init__(self, amount: int, balance: int):
        super().__init__(
            f"Depositing {amount} would overflow the fund balance {balance}",
            "ERR-BALANCE-OVERFLOW", ErrorCategory.BUSINESS_RULE, 409,
        )
        self.amount = amount


# ─── Authorization (403) ────────────────────────────────────────

class NotAuthorizedError(LedgerError):
    def __init__(self, caller: str, action: str):
        super().__init__(
            f"{caller} is not authorized to {action}",
            "ERR-NOT-AUTHORIZED", ErrorCategory.AUTHORIZATION, 403,
        )
        self.caller = caller
