"""Root conftest: shared ledger fixtures."""

import os

import pytest

# Keep tests independent of any local .env
os.environ.setdefault("RELIEF_INITIAL_OWNER", "deployer")
os.environ.setdefault("RELIEF_QUORUM", "3")
os.environ.setdefault("RELIEF_VOTING_PERIOD_BLOCKS", "144")

from app.core.context import CallContext  # noqa: E402
from app.ledger.engine import ReliefLedger  # noqa: E402

DEPLOYER = "deployer"
USER1 = "user1"
USER2 = "user2"
USER3 = "user3"

VOTING_PERIOD = 144
QUORUM = 3


def at(caller: str, block_height: int = 0) -> CallContext:
    return CallContext(caller=caller, block_height=block_height)


@pytest.fixture
def ledger():
    return ReliefLedger(owner=DEPLOYER, voting_period_blocks=VOTING_PERIOD, quorum=QUORUM)


@pytest.fixture
def funded_ledger(ledger):
    ledger.deposit_funds(5000, at(DEPLOYER))
    return ledger


@pytest.fixture
def voted_claim(funded_ledger):
    """Claim of 1000 by user1 with three yes votes, submitted at block 0."""
    claim_id = funded_ledger.submit_claim(1000, "Test claim", "medical", at(USER1))
    for voter in (USER1, USER2, USER3):
        funded_ledger.vote_on_claim(claim_id, True, at(voter))
    return claim_id
