"""Concurrent calls: every operation is one serializable transaction.

Invariants:
    - Concurrent submissions get distinct, gap-free ids
    - Concurrent votes from the same principal count once
    - Concurrent finalization pays out at most once
"""

from concurrent.futures import ThreadPoolExecutor

from app.core.errors import AlreadyVotedError, ClaimNotPendingError
from app.core.states import ClaimStatus
from conftest import USER1, USER2, VOTING_PERIOD, at


def test_concurrent_submissions_get_unique_ids(ledger):
    def submit(i):
        return ledger.submit_claim(100 + i, f"claim {i}", "medical", at(f"member{i}"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(submit, range(200)))

    assert sorted(ids) == list(range(1, 201))


def test_concurrent_double_vote_counts_once(ledger):
    claim_id = ledger.submit_claim(1000, "Test claim", "medical", at(USER1))

    def vote(_):
        try:
            ledger.vote_on_claim(claim_id, True, at(USER2))
            return True
        except AlreadyVotedError:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(vote, range(50)))

    assert results.count(True) == 1
    assert ledger.get_claim(claim_id).yes_votes == 1


def test_concurrent_finalize_pays_once(funded_ledger, voted_claim):
    def finalize(_):
        try:
            return funded_ledger.finalize_claim(voted_claim, at(USER2, VOTING_PERIOD + 1)).status
        except ClaimNotPendingError:
            return None

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(finalize, range(20)))

    assert results.count(ClaimStatus.APPROVED) == 1
    assert funded_ledger.get_fund_balance() == 4000
