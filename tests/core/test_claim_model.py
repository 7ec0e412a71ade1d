"""Claim model: tallies, voting window and audit trail.

Invariants:
    - total_votes is always yes_votes + no_votes and is serialized
    - Votes are accepted up to and including the deadline block
    - amount must be positive at construction
"""

import pytest
from pydantic import ValidationError

from app.core.models import Claim, ClaimCreate
from app.core.states import ClaimStatus


def _claim(**overrides) -> Claim:
    fields = dict(
        id=1, beneficiary="user1", amount=1000, description="Medical emergency expenses",
        category="medical", created_at=10, voting_deadline=154,
    )
    fields.update(overrides)
    return Claim(**fields)


def test_new_claim_is_pending_with_no_votes():
    claim = _claim()
    assert claim.status == ClaimStatus.PENDING
    assert claim.yes_votes == 0
    assert claim.no_votes == 0
    assert claim.total_votes == 0
    assert claim.finalized_at is None


def test_record_vote_increments_matching_tally():
    claim = _claim()
    claim.record_vote(True)
    claim.record_vote(True)
    claim.record_vote(False)
    assert claim.yes_votes == 2
    assert claim.no_votes == 1
    assert claim.total_votes == 3


def test_total_votes_is_serialized():
    claim = _claim()
    claim.record_vote(True)
    assert claim.model_dump()["total_votes"] == 1


def test_voting_open_through_deadline_block():
    claim = _claim()
    assert claim.is_voting_open(154)
    assert not claim.is_voting_open(155)


def test_zero_amount_rejected_by_model():
    with pytest.raises(ValidationError):
        _claim(amount=0)


def test_record_status_change_sets_finalized_at():
    claim = _claim()
    claim.record_status_change(ClaimStatus.EXPIRED, 200)
    assert claim.status == ClaimStatus.EXPIRED
    assert claim.finalized_at == 200


def test_audit_entry_appended():
    claim = _claim()
    claim.add_audit_entry(actor="user2", block_height=11, action="VOTED_YES")
    assert claim.audit_log[-1].actor == "user2"
    assert claim.audit_log[-1].detail == ""


def test_claim_create_leaves_amount_checks_to_ledger():
    body = ClaimCreate(amount=0, description="x", category="medical")
    assert body.amount == 0
