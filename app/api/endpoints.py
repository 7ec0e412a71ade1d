"""
FastAPI Endpoints for the Relief DAO

Provides the REST surface for claims, votes, the shared fund and DAO
ownership. The caller principal and block height come from the X-Caller
and X-Block-Height headers set by the execution environment.
"""
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Header, status
from pydantic import BaseModel

from app.config import get_settings
from app.core.context import CallContext
from app.core.models import AuditLogEntry, Claim, ClaimCreate, DepositRequest, OwnerUpdate, VoteCast
from app.core.states import ClaimStatus
from app.ledger.engine import ReliefLedger

logger = logging.getLogger(__name__)

# Initialize routers
router = APIRouter(prefix="/claims", tags=["claims"])
fund_router = APIRouter(prefix="/fund", tags=["fund"])
dao_router = APIRouter(prefix="/dao", tags=["dao"])

# Process-wide ledger (would be chain state in production)
ledger = ReliefLedger.from_settings(get_settings())


def get_ledger() -> ReliefLedger:
    return ledger


def get_call_context(
    x_caller: str = Header(..., description="Authenticated caller principal"),
    x_block_height: int = Header(..., ge=0, description="Current block height"),
) -> CallContext:
    return CallContext(caller=x_caller, block_height=x_block_height)


class ClaimResponse(BaseModel):
    """Response model for claim operations."""
    claim: Claim
    message: str
    next_valid_statuses: List[ClaimStatus]


class VotesResponse(BaseModel):
    claim_id: int
    votes: Dict[str, bool]
    yes_votes: int
    no_votes: int


class ClaimHistoryResponse(BaseModel):
    """Response model for a claim's audit trail."""
    claim_id: int
    status: ClaimStatus
    audit_log: List[AuditLogEntry]


class FinalizeResponse(BaseModel):
    claim_id: int
    status: ClaimStatus
    payout: int
    fund_balance: int
    message: str


class BalanceResponse(BaseModel):
    balance: int


class DepositResponse(BaseModel):
    balance: int
    message: str


class OwnerResponse(BaseModel):
    owner: str
    message: str = ""


def _claim_response(ledger: ReliefLedger, claim: Claim, message: str) -> ClaimResponse:
    return ClaimResponse(
        claim=claim,
        message=message,
        next_valid_statuses=ledger.get_valid_transitions(claim)
    )


# ============================================
# CLAIMS
# ============================================

@router.post("/", response_model=ClaimResponse, status_code=status.HTTP_201_CREATED)
async def submit_claim(
    claim_data: ClaimCreate,
    ctx: CallContext = Depends(get_call_context),
    ledger: ReliefLedger = Depends(get_ledger),
) -> ClaimResponse:
    """
    Submit a new relief claim.

    The claim starts PENDING and accepts votes until its voting deadline.
    """
    claim_id = ledger.submit_claim(
        amount=claim_data.amount,
        description=claim_data.description,
        category=claim_data.category,
        ctx=ctx
    )
    claim = ledger.get_claim(claim_id)

    return _claim_response(
        ledger, claim, f"Claim {claim_id} submitted, voting open until block {claim.voting_deadline}"
    )


@router.get("/", response_model=List[Claim])
async def list_claims(
    status_filter: Optional[ClaimStatus] = None,
    ledger: ReliefLedger = Depends(get_ledger),
) -> List[Claim]:
    """List all claims, optionally only those with the given status."""
    return ledger.list_claims(status_filter)


@router.get("/{claim_id}", response_model=ClaimResponse)
async def get_claim(claim_id: int, ledger: ReliefLedger = Depends(get_ledger)) -> ClaimResponse:
    claim = ledger.get_claim(claim_id)
    return _claim_response(ledger, claim, f"Claim {claim_id} retrieved")


@router.post("/{claim_id}/votes", response_model=ClaimResponse)
async def vote_on_claim(
    claim_id: int,
    request: VoteCast,
    ctx: CallContext = Depends(get_call_context),
    ledger: ReliefLedger = Depends(get_ledger),
) -> ClaimResponse:
    """
    Cast a yes/no vote on a pending claim.

    Each principal votes at most once per claim and only up to the
    voting deadline.
    """
    claim = ledger.vote_on_claim(claim_id, request.vote, ctx)
    return _claim_response(
        ledger, claim,
        f"Vote recorded: {claim.yes_votes} yes / {claim.no_votes} no"
    )


@router.get("/{claim_id}/votes", response_model=VotesResponse)
async def get_claim_votes(claim_id: int, ledger: ReliefLedger = Depends(get_ledger)) -> VotesResponse:
    votes = ledger.get_votes(claim_id)
    return VotesResponse(
        claim_id=claim_id,
        votes=votes,
        yes_votes=sum(1 for v in votes.values() if v),
        no_votes=sum(1 for v in votes.values() if not v)
    )


@router.get("/{claim_id}/history", response_model=ClaimHistoryResponse)
async def get_claim_history(claim_id: int, ledger: ReliefLedger = Depends(get_ledger)) -> ClaimHistoryResponse:
    """Get the audit trail of a claim."""
    claim = ledger.get_claim(claim_id)
    return ClaimHistoryResponse(
        claim_id=claim.id,
        status=claim.status,
        audit_log=claim.audit_log
    )


@router.post("/{claim_id}/finalize", response_model=FinalizeResponse)
async def finalize_claim(
    claim_id: int,
    ctx: CallContext = Depends(get_call_context),
    ledger: ReliefLedger = Depends(get_ledger),
) -> FinalizeResponse:
    """
    Finalize a claim after its voting window has closed.

    Approved claims are paid out of the fund in the same step.
    """
    result = ledger.finalize_claim(claim_id, ctx)

    return FinalizeResponse(
        claim_id=claim_id,
        status=result.status,
        payout=result.payout,
        fund_balance=result.fund_balance,
        message=result.reason
    )


# ============================================
# FUND
# ============================================

@fund_router.get("/balance", response_model=BalanceResponse)
async def get_fund_balance(ledger: ReliefLedger = Depends(get_ledger)) -> BalanceResponse:
    return BalanceResponse(balance=ledger.get_fund_balance())


@fund_router.post("/deposits", response_model=DepositResponse)
async def deposit_funds(
    request: DepositRequest,
    ctx: CallContext = Depends(get_call_context),
    ledger: ReliefLedger = Depends(get_ledger),
) -> DepositResponse:
    """Deposit into the shared fund. Owner-only unless open deposits are enabled."""
    balance = ledger.deposit_funds(request.amount, ctx)
    return DepositResponse(
        balance=balance,
        message=f"Deposited {request.amount}, fund balance is now {balance}"
    )


# ============================================
# DAO ADMINISTRATION
# ============================================

@dao_router.get("/owner", response_model=OwnerResponse)
async def get_dao_owner(ledger: ReliefLedger = Depends(get_ledger)) -> OwnerResponse:
    return OwnerResponse(owner=ledger.get_dao_owner())


@dao_router.put("/owner", response_model=OwnerResponse)
async def update_dao_owner(
    request: OwnerUpdate,
    ctx: CallContext = Depends(get_call_context),
    ledger: ReliefLedger = Depends(get_ledger),
) -> OwnerResponse:
    """Transfer DAO ownership. Only the current owner may do this."""
    owner = ledger.update_dao_owner(request.new_owner, ctx)
    return OwnerResponse(owner=owner, message=f"DAO owner is now {owner}")


@dao_router.get("/summary")
async def get_dao_summary(ledger: ReliefLedger = Depends(get_ledger)):
    """Get summary statistics for the dashboard."""
    summary = ledger.summary()
    summary["claims"] = [
        {
            "id": c.id,
            "beneficiary": c.beneficiary,
            "amount": c.amount,
            "category": c.category,
            "status": c.status.value,
            "yes_votes": c.yes_votes,
            "no_votes": c.no_votes,
            "voting_deadline": c.voting_deadline
        }
        for c in ledger.list_claims()
    ]
    return summary
