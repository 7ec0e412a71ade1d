"""Claim State Machine: legal transitions and the outcome rule.

Invariants:
    - PENDING is the only status with outgoing transitions
    - EXPIRED when quorum is missing, REJECTED when the vote or the fund falls short
"""

import pytest

from app.core.models import Claim
from app.core.states import ClaimStatus
from app.state_machine.machine import ClaimStateMachine


def _claim(yes: int = 0, no: int = 0, amount: int = 1000) -> Claim:
    return Claim(
        id=1, beneficiary="user1", amount=amount, description="d", category="medical",
        created_at=0, voting_deadline=144, yes_votes=yes, no_votes=no,
    )


@pytest.fixture
def machine():
    return ClaimStateMachine(quorum=3)


def test_pending_can_reach_every_terminal_status(machine):
    assert machine.get_valid_transitions(_claim()) == [
        ClaimStatus.APPROVED, ClaimStatus.REJECTED, ClaimStatus.EXPIRED,
    ]


@pytest.mark.parametrize("terminal", [ClaimStatus.APPROVED, ClaimStatus.REJECTED, ClaimStatus.EXPIRED])
def test_terminal_statuses_have_no_exit(machine, terminal):
    claim = _claim()
    machine.transition(claim, terminal, 200)
    assert machine.get_valid_transitions(claim) == []
    with pytest.raises(ValueError):
        machine.transition(claim, ClaimStatus.APPROVED, 201)
    assert claim.status == terminal
    assert claim.finalized_at == 200


def test_pending_to_pending_invalid(machine):
    assert not machine.can_transition(_claim(), ClaimStatus.PENDING)


@pytest.mark.parametrize("yes,no,balance,expected", [
    (3, 0, 5000, ClaimStatus.APPROVED),
    (2, 1, 5000, ClaimStatus.APPROVED),
    (2, 0, 5000, ClaimStatus.EXPIRED),
    (0, 0, 5000, ClaimStatus.EXPIRED),
    (1, 2, 5000, ClaimStatus.REJECTED),
    (2, 2, 5000, ClaimStatus.REJECTED),
    (3, 0, 999, ClaimStatus.REJECTED),
    (3, 0, 1000, ClaimStatus.APPROVED),
])
def test_decide_outcome(machine, yes, no, balance, expected):
    assert machine.decide_outcome(_claim(yes, no), balance) == expected


def test_explain_outcome_mentions_quorum(machine):
    assert "Quorum not reached (1/3" in machine.explain_outcome(_claim(yes=1), 5000)


def test_quorum_must_be_positive():
    with pytest.raises(ValueError):
        ClaimStateMachine(quorum=0)
