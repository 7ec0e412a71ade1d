"""
Relief Ledger Engine

The claim lifecycle engine of the relief DAO. Owns the claim store, vote
tracker, fund ledger and owner state, and routes every mutation through a
single lock so each call is one serializable, all-or-nothing transaction.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from app.config import Settings
from app.core.context import CallContext
from app.core.errors import (
    AlreadyVotedError,
    ClaimNotPendingError,
    InvalidAmountError,
    InvalidInputError,
    VotingClosedError,
    VotingStillOpenError,
)
from app.core.models import Claim
from app.core.states import ClaimStatus
from app.ledger.access import AccessControl
from app.ledger.fund import MAX_BALANCE, FundLedger
from app.ledger.store import ClaimStore, VoteTracker
from app.monitors.ledger_monitor import LedgerMonitor
from app.state_machine.machine import ClaimStateMachine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinalizeResult:
    """What one finalize committed, read inside the same transaction."""
    claim: Claim
    payout: int
    fund_balance: int
    reason: str

    @property
    def status(self) -> ClaimStatus:
        return self.claim.status


class ReliefLedger:
    """
    Governance ledger for pooled emergency-relief funds.

    Every public method validates completely before its first write, so a
    raised LedgerError always means nothing changed. The block height is
    checked last, after lookup, authorization and argument checks, so a
    stale height only surfaces on a call that would otherwise succeed.
    """

    def __init__(
        self,
        owner: str,
        voting_period_blocks: int = 144,
        quorum: int = 3,
        *,
        open_deposits: bool = False,
        max_description_length: int = 500,
        max_category_length: int = 50,
        monitor: Optional[LedgerMonitor] = None,
    ):
        if voting_period_blocks < 1:
            raise ValueError("voting_period_blocks must be >= 1")

        self.voting_period_blocks = voting_period_blocks
        self.open_deposits = open_deposits
        self.max_description_length = max_description_length
        self.max_category_length = max_category_length

        self._claims = ClaimStore()
        self._votes = VoteTracker()
        self._fund = FundLedger()
        self._access = AccessControl(owner)
        self._state_machine = ClaimStateMachine(quorum)
        self._monitor = monitor or LedgerMonitor()

        self._lock = threading.RLock()
        self._last_block_height = 0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReliefLedger":
        return cls(
            owner=settings.initial_owner,
            voting_period_blocks=settings.voting_period_blocks,
            quorum=settings.quorum,
            open_deposits=settings.open_deposits,
            max_description_length=settings.max_description_length,
            max_category_length=settings.max_category_length,
        )

    @property
    def quorum(self) -> int:
        return self._state_machine.quorum

    @property
    def monitor(self) -> LedgerMonitor:
        return self._monitor

    # ------------------------------------------------------------------
    # Claims
    # ------------------------------------------------------------------

    def submit_claim(self, amount: int, description: str, category: str, ctx: CallContext) -> int:
        """
        Submit a reimbursement claim on behalf of ctx.caller.

        Returns:
            The id of the new pending claim

        Raises:
            InvalidAmountError: If amount is not positive or exceeds MAX_BALANCE
            InvalidInputError: If description or category is empty, too long or not ASCII
        """
        with self._lock:
            if amount <= 0 or amount > MAX_BALANCE:
                raise InvalidAmountError(amount)
            self._check_text("description", description, self.max_description_length)
            self._check_text("category", category, self.max_category_length)
            self._check_height(ctx)

            claim = Claim(
                id=self._claims.next_id(),
                beneficiary=ctx.caller,
                amount=amount,
                description=description,
                category=category,
                created_at=ctx.block_height,
                voting_deadline=ctx.block_height + self.voting_period_blocks,
            )
            claim.add_audit_entry(
                actor=ctx.caller,
                block_height=ctx.block_height,
                action="SUBMITTED",
                detail=f"Requested {amount} for {category}",
            )
            self._claims.add(claim)

            logger.info(
                f"Created claim {claim.id} for {ctx.caller}: {amount} ({category}), "
                f"voting open until block {claim.voting_deadline}"
            )
            self._last_block_height = ctx.block_height
            return claim.id

    def vote_on_claim(self, claim_id: int, vote: bool, ctx: CallContext) -> Claim:
        """
        Cast ctx.caller's yes/no vote on a pending claim.

        Returns:
            Snapshot of the claim after the vote

        Raises:
            ClaimNotFoundError, ClaimNotPendingError, VotingClosedError, AlreadyVotedError
        """
        with self._lock:
            claim = self._claims.get(claim_id)
            if claim.status != ClaimStatus.PENDING:
                raise ClaimNotPendingError(claim_id, claim.status.value)
            if not claim.is_voting_open(ctx.block_height):
                raise VotingClosedError(claim_id, claim.voting_deadline, ctx.block_height)
            if self._votes.has_voted(claim_id, ctx.caller):
                raise AlreadyVotedError(claim_id, ctx.caller)
            self._check_height(ctx)

            self._votes.record(claim_id, ctx.caller, vote)
            claim.record_vote(vote)
            claim.add_audit_entry(
                actor=ctx.caller,
                block_height=ctx.block_height,
                action="VOTED_YES" if vote else "VOTED_NO",
            )

            logger.info(
                f"{ctx.caller} voted {'yes' if vote else 'no'} on claim {claim_id} "
                f"({claim.yes_votes} yes / {claim.no_votes} no)"
            )
            self._last_block_height = ctx.block_height
            return claim.model_copy(deep=True)

    def finalize_claim(self, claim_id: int, ctx: CallContext) -> FinalizeResult:
        """
        Close out a claim whose voting window has passed.

        An approved claim is paid from the fund in the same transaction.
        A claim that passed but cannot be covered in full is rejected.

        Returns:
            The finalized claim with the payout and the fund balance it left

        Raises:
            ClaimNotFoundError, ClaimNotPendingError, VotingStillOpenError
        """
        with self._lock:
            claim = self._claims.get(claim_id)
            if claim.status != ClaimStatus.PENDING:
                raise ClaimNotPendingError(claim_id, claim.status.value)
            if claim.is_voting_open(ctx.block_height):
                raise VotingStillOpenError(claim_id, claim.voting_deadline, ctx.block_height)
            self._check_height(ctx)

            balance = self._fund.balance
            outcome = self._state_machine.decide_outcome(claim, balance)
            reason = self._state_machine.explain_outcome(claim, balance)

            # Payout first: a failed withdraw must leave the claim pending
            payout = 0
            if outcome == ClaimStatus.APPROVED:
                self._fund.withdraw(claim.amount)
                payout = claim.amount

            self._state_machine.transition(claim, outcome, ctx.block_height)
            claim.add_audit_entry(
                actor=ctx.caller,
                block_height=ctx.block_height,
                action=outcome.value.upper(),
                detail=reason,
            )

            self._last_block_height = ctx.block_height
            logger.info(f"Claim {claim_id} finalized by {ctx.caller}: {outcome.value}. {reason}")

            result = FinalizeResult(
                claim=claim.model_copy(deep=True),
                payout=payout,
                fund_balance=self._fund.balance,
                reason=reason,
            )
            self._monitor.on_status_entered(claim.model_copy(deep=True), outcome)
            return result

    def get_claim(self, claim_id: int) -> Claim:
        """Detached copy of a claim. Raises ClaimNotFoundError."""
        with self._lock:
            return self._claims.get(claim_id).model_copy(deep=True)

    def list_claims(self, status: Optional[ClaimStatus] = None) -> List[Claim]:
        with self._lock:
            return [
                claim.model_copy(deep=True)
                for claim in self._claims
                if status is None or claim.status == status
            ]

    def get_votes(self, claim_id: int) -> Dict[str, bool]:
        """Voter -> vote for one claim. Raises ClaimNotFoundError."""
        with self._lock:
            self._claims.get(claim_id)
            return self._votes.ballot(claim_id)

    def get_valid_transitions(self, claim: Claim) -> List[ClaimStatus]:
        return self._state_machine.get_valid_transitions(claim)

    # ------------------------------------------------------------------
    # Fund and administration
    # ------------------------------------------------------------------

    def deposit_funds(self, amount: int, ctx: CallContext) -> int:
        """
        Add amount to the shared fund.

        Returns:
            The new balance

        Raises:
            NotAuthorizedError: If deposits are owner-only and caller is not the owner
            InvalidAmountError: If amount is not positive
            BalanceOverflowError: If the balance would overflow
        """
        with self._lock:
            if not self.open_deposits:
                self._access.require_owner(ctx.caller, "deposit funds")
            self._fund.check_deposit(amount)
            self._check_height(ctx)
            balance = self._fund.deposit(amount)
            self._last_block_height = ctx.block_height
            logger.info(f"{ctx.caller} deposited {amount} at block {ctx.block_height}")
            return balance

    def get_fund_balance(self) -> int:
        with self._lock:
            return self._fund.balance

    def update_dao_owner(self, new_owner: str, ctx: CallContext) -> str:
        """Transfer DAO ownership. Raises NotAuthorizedError or InvalidInputError."""
        with self._lock:
            self._access.require_owner(ctx.caller, "update the DAO owner")
            self._check_height(ctx)
            owner = self._access.update_owner(new_owner, ctx.caller)
            self._last_block_height = ctx.block_height
            return owner

    def get_dao_owner(self) -> str:
        with self._lock:
            return self._access.owner

    def summary(self) -> dict:
        """Counts per status plus fund and governance parameters."""
        with self._lock:
            status_counts = {status.value: 0 for status in ClaimStatus}
            total_paid = 0
            for claim in self._claims:
                status_counts[claim.status.value] += 1
                if claim.status == ClaimStatus.APPROVED:
                    total_paid += claim.amount
            return {
                "total_claims": len(self._claims),
                "status_counts": status_counts,
                "total_paid_out": total_paid,
                "fund_balance": self._fund.balance,
                "dao_owner": self._access.owner,
                "quorum": self.quorum,
                "voting_period_blocks": self.voting_period_blocks,
                "last_block_height": self._last_block_height,
            }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_height(self, ctx: CallContext) -> None:
        """Block height is monotonic; a call from the past is rejected."""
        if ctx.block_height < self._last_block_height:
            raise InvalidInputError(
                f"Block height {ctx.block_height} is behind the last observed "
                f"height {self._last_block_height}",
                "block_height",
            )

    @staticmethod
    def _check_text(field: str, value: str, max_length: int) -> None:
        if not value or not value.strip():
            raise InvalidInputError(f"{field} must not be empty", field)
        if len(value) > max_length:
            raise InvalidInputError(
                f"{field} must be at most {max_length} characters, got {len(value)}", field
            )
        if not value.isascii():
            raise InvalidInputError(f"{field} must be ASCII text", field)
