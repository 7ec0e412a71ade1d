"""
Claim State Machine

Holds the legal status transitions of a relief claim and the rule that
picks the terminal status once voting has closed.
"""
from typing import Dict, List, Set

from app.core.states import ClaimStatus
from app.core.models import Claim


class ClaimStateMachine:
    """
    State machine for the claim voting lifecycle.

    PENDING is the only non-terminal status; finalization moves a claim to
    exactly one of APPROVED, REJECTED or EXPIRED and it stays there.
    """

    # Define valid transitions (from_status -> set of valid to_statuses)
    TRANSITIONS: Dict[ClaimStatus, Set[ClaimStatus]] = {
        ClaimStatus.PENDING: {ClaimStatus.APPROVED, ClaimStatus.REJECTED, ClaimStatus.EXPIRED},
        ClaimStatus.APPROVED: set(),  # Terminal
        ClaimStatus.REJECTED: set(),  # Terminal
        ClaimStatus.EXPIRED: set(),  # Terminal
    }

    def __init__(self, quorum: int):
        """
        Initialize the state machine.

        Args:
            quorum: Minimum number of votes a claim needs before it can pass
        """
        if quorum < 1:
            raise ValueError("quorum must be >= 1")
        self.quorum = quorum

    def get_valid_transitions(self, claim: Claim) -> List[ClaimStatus]:
        """Get list of valid next statuses for a claim, in a stable order."""
        targets = self.TRANSITIONS.get(claim.status, set())
        return [status for status in ClaimStatus if status in targets]

    def can_transition(self, claim: Claim, target_status: ClaimStatus) -> bool:
        """Check if a transition to target_status is valid."""
        return target_status in self.TRANSITIONS.get(claim.status, set())

    def transition(self, claim: Claim, target_status: ClaimStatus, block_height: int) -> Claim:
        """
        Execute a status transition.

        Args:
            claim: The claim to transition
            target_status: The desired terminal status
            block_height: Height the transition is recorded at

        Returns:
            Updated claim with new status

        Raises:
            ValueError: If the transition is not valid
        """
        if not self.can_transition(claim, target_status):
            valid = self.get_valid_transitions(claim)
            raise ValueError(
                f"Invalid transition from {claim.status.value} to {target_status.value}. "
                f"Valid transitions: {[s.value for s in valid]}"
            )

        claim.record_status_change(target_status, block_height)
        return claim

    def has_quorum(self, claim: Claim) -> bool:
        return claim.total_votes >= self.quorum

    def has_majority(self, claim: Claim) -> bool:
        return claim.yes_votes > claim.no_votes

    def decide_outcome(self, claim: Claim, fund_balance: int) -> ClaimStatus:
        """
        Pick the terminal status for a claim whose voting window has closed.

        - Quorum not reached: EXPIRED
        - Quorum reached, yes votes not ahead: REJECTED
        - Passed, but the fund cannot cover the full amount: REJECTED
        - Otherwise: APPROVED
        """
        if not self.has_quorum(claim):
            return ClaimStatus.EXPIRED
        if not self.has_majority(claim):
            return ClaimStatus.REJECTED
        if fund_balance < claim.amount:
            return ClaimStatus.REJECTED
        return ClaimStatus.APPROVED

    def explain_outcome(self, claim: Claim, fund_balance: int) -> str:
        """One-line reason for the outcome, used in the audit log."""
        if not self.has_quorum(claim):
            return f"Quorum not reached ({claim.total_votes}/{self.quorum} votes)"
        if not self.has_majority(claim):
            return f"Vote failed ({claim.yes_votes} yes / {claim.no_votes} no)"
        if fund_balance < claim.amount:
            return f"Insufficient funds ({fund_balance} available, {claim.amount} requested)"
        return f"Vote passed ({claim.yes_votes} yes / {claim.no_votes} no), paid {claim.amount}"
