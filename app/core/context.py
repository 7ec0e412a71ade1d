"""
Call Context

The execution context the outside world hands to every ledger call: who is
calling and at which block height. The ledger never derives either itself.
"""
from dataclasses import dataclass

from .errors import InvalidInputError


@dataclass(frozen=True)
class CallContext:
    """Authenticated caller principal plus the current block height."""
    caller: str
    block_height: int

    def __post_init__(self):
        if not self.caller or not self.caller.strip():
            raise InvalidInputError("Caller principal must not be empty", "caller")
        if self.block_height < 0:
            raise InvalidInputError(
                f"Block height must be non-negative, got {self.block_height}",
                "block_height",
            )
