"""
Claim Pydantic Models

Defines the ledger records and the request bodies of the DAO API.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field

from .states import ClaimStatus


class AuditLogEntry(BaseModel):
    """Entry in the claim audit log."""
    actor: str = Field(..., description="Principal that performed the action")
    block_height: int = Field(..., ge=0, description="Block height the action was recorded at")
    action: str = Field(..., description="SUBMITTED, VOTED_YES, VOTED_NO or the final status")
    detail: str = Field(default="", description="Human readable detail")


class ClaimCreate(BaseModel):
    """
    Request model for submitting a claim.

    Limits are enforced by the ledger so that violations surface with the
    ledger's own error codes.
    """
    amount: int = Field(..., description="Requested amount in the smallest currency unit")
    description: str = Field(..., description="What the relief is for")
    category: str = Field(..., description="Relief category, e.g. medical")


class VoteCast(BaseModel):
    """Request model for a yes/no vote."""
    vote: bool = Field(..., description="True for yes, False for no")


class DepositRequest(BaseModel):
    """Request model for a fund deposit."""
    amount: int = Field(..., description="Amount to add to the shared fund")


class OwnerUpdate(BaseModel):
    """Request model for transferring DAO ownership."""
    new_owner: str = Field(..., description="Principal that becomes the DAO owner")


class Claim(BaseModel):
    """
    Relief Claim Model

    A reimbursement request moving through the voting lifecycle. Identity,
    amount, text and block heights never change after submission; only the
    tallies, status and audit log do.
    """
    id: int = Field(..., ge=1, description="Monotonic claim identifier")
    beneficiary: str = Field(..., description="Principal that submitted the claim")
    amount: int = Field(..., gt=0, description="Requested amount in the smallest currency unit")
    description: str = Field(..., description="What the relief is for")
    category: str = Field(..., description="Relief category")
    status: ClaimStatus = Field(default=ClaimStatus.PENDING, description="Current lifecycle status")
    yes_votes: int = Field(default=0, ge=0)
    no_votes: int = Field(default=0, ge=0)
    created_at: int = Field(..., ge=0, description="Block height at submission")
    voting_deadline: int = Field(..., ge=0, description="Last block height at which votes are accepted")
    finalized_at: Optional[int] = Field(default=None, description="Block height of finalization")
    audit_log: List[AuditLogEntry] = Field(default_factory=list)

    @computed_field
    @property
    def total_votes(self) -> int:
        return self.yes_votes + self.no_votes

    def is_voting_open(self, block_height: int) -> bool:
        """Votes are accepted up to and including the deadline block."""
        return block_height <= self.voting_deadline

    def record_vote(self, vote: bool) -> None:
        if vote:
            self.yes_votes += 1
        else:
            self.no_votes += 1

    def record_status_change(self, new_status: ClaimStatus, block_height: int) -> None:
        """Record the terminal transition."""
        self.status = new_status
        self.finalized_at = block_height

    def add_audit_entry(
        self,
        actor: str,
        block_height: int,
        action: str,
        detail: str = ""
    ) -> None:
        """Add an entry to the audit log."""
        self.audit_log.append(
            AuditLogEntry(
                actor=actor,
                block_height=block_height,
                action=action,
                detail=detail
            )
        )
