"""
Ledger Monitor

Watches claim status changes and triggers event hooks once a claim has
been finalized.
"""
import logging
from typing import Callable, Dict, List

from app.core.models import Claim
from app.core.states import ClaimStatus

logger = logging.getLogger(__name__)

StatusHandler = Callable[[Claim], None]


class LedgerMonitor:
    """
    Dispatches hooks when a claim enters a terminal status.

    Handlers run after the transition (and any payout) has been committed,
    so they observe final state and must not mutate the claim. A handler
    that raises is logged and never fails the operation that fired it.
    """

    def __init__(self):
        self._event_handlers: Dict[ClaimStatus, List[StatusHandler]] = {}

        # Register default handlers
        self._register_default_handlers()

    def _register_default_handlers(self) -> None:
        """Register default event handlers for terminal statuses."""
        self.register_handler(ClaimStatus.APPROVED, self._on_approved)
        self.register_handler(ClaimStatus.REJECTED, self._on_lapsed)
        self.register_handler(ClaimStatus.EXPIRED, self._on_lapsed)

    def register_handler(self, status: ClaimStatus, handler: StatusHandler) -> None:
        """
        Register a handler to be called when a claim enters a status.

        Args:
            status: The status that triggers the handler
            handler: Function to call with the finalized claim
        """
        if status not in self._event_handlers:
            self._event_handlers[status] = []
        self._event_handlers[status].append(handler)
        logger.debug(f"Registered handler for status {status.value}")

    def handlers_for(self, status: ClaimStatus) -> List[StatusHandler]:
        return list(self._event_handlers.get(status, []))

    def _on_approved(self, claim: Claim) -> None:
        logger.info(
            f"Claim {claim.id} approved at block {claim.finalized_at}: "
            f"paid {claim.amount} to {claim.beneficiary}"
        )

    def _on_lapsed(self, claim: Claim) -> None:
        logger.info(
            f"Claim {claim.id} {claim.status.value} at block {claim.finalized_at} "
            f"({claim.yes_votes} yes / {claim.no_votes} no)"
        )

    def on_status_entered(self, claim: Claim, status: ClaimStatus) -> None:
        """
        Called when a claim enters a new status; runs every registered handler.

        The transition is already committed, so a failing handler is logged
        and the remaining handlers still run.
        """
        for handler in self.handlers_for(status):
            try:
                handler(claim)
            except Exception:
                logger.exception(f"Status handler failed for claim {claim.id} entering {status.value}")
