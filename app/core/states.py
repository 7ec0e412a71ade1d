"""
Claim Status Definitions

Defines all possible statuses of a relief claim in the DAO ledger.
"""
from enum import Enum


class ClaimStatus(str, Enum):
    """
    Enum representing the lifecycle status of a relief claim.

    Every claim starts PENDING and leaves it exactly once:
    PENDING -> APPROVED | REJECTED | EXPIRED
    """
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"
