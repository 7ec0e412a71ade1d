# Ledger module - fund, access control, stores and the lifecycle engine
from .fund import FundLedger, MAX_BALANCE
from .access import AccessControl
from .store import ClaimStore, VoteTracker
from .engine import FinalizeResult, ReliefLedger

__all__ = ["FundLedger", "MAX_BALANCE", "AccessControl", "ClaimStore", "VoteTracker",
           "FinalizeResult", "ReliefLedger"]
