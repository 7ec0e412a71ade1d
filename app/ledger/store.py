"""
Claim Store and Vote Tracker

Plain in-memory data structures behind the lifecycle engine. They enforce
existence and uniqueness; every other rule lives in the engine.
"""
from typing import Dict, Iterator

from app.core.errors import AlreadyVotedError, ClaimNotFoundError
from app.core.models import Claim


class ClaimStore:
    """Mapping from claim id to Claim with a monotonic id allocator."""

    FIRST_ID = 1

    def __init__(self):
        self._claims: Dict[int, Claim] = {}
        self._next_id = self.FIRST_ID

    def next_id(self) -> int:
        """Allocate an id. Ids are never handed out twice."""
        claim_id = self._next_id
        self._next_id += 1
        return claim_id

    def add(self, claim: Claim) -> None:
        if claim.id in self._claims:
            raise ValueError(f"Claim {claim.id} already stored")
        self._claims[claim.id] = claim

    def get(self, claim_id: int) -> Claim:
        claim = self._claims.get(claim_id)
        if claim is None:
            raise ClaimNotFoundError(claim_id)
        return claim

    def __contains__(self, claim_id: int) -> bool:
        return claim_id in self._claims

    def __len__(self) -> int:
        return len(self._claims)

    def __iter__(self) -> Iterator[Claim]:
        return iter(self._claims.values())


class VoteTracker:
    """Per-claim record of who voted and how."""

    def __init__(self):
        self._votes: Dict[int, Dict[str, bool]] = {}

    def has_voted(self, claim_id: int, voter: str) -> bool:
        return voter in self._votes.get(claim_id, {})

    def record(self, claim_id: int, voter: str, vote: bool) -> None:
        """
        Record a (claim, voter) pair.

        Raises:
            AlreadyVotedError: If the pair is already recorded
        """
        ballot = self._votes.setdefault(claim_id, {})
        if voter in ballot:
            raise AlreadyVotedError(claim_id, voter)
        ballot[voter] = vote

    def ballot(self, claim_id: int) -> Dict[str, bool]:
        return dict(self._votes.get(claim_id, {}))
