"""
Access Control

Tracks the DAO owner and gates the administrative operations.
"""
import logging

from app.core.errors import InvalidInputError, NotAuthorizedError

logger = logging.getLogger(__name__)


class AccessControl:
    """Single-owner authorization. No history is kept beyond the current owner."""

    def __init__(self, owner: str):
        if not owner or not owner.strip():
            raise ValueError("DAO owner must be a non-empty principal")
        self._owner = owner

    @property
    def owner(self) -> str:
        return self._owner

    def is_owner(self, caller: str) -> bool:
        return caller == self._owner

    def require_owner(self, caller: str, action: str = "perform this action") -> None:
        """Raise NotAuthorizedError unless caller is the current owner."""
        if not self.is_owner(caller):
            raise NotAuthorizedError(caller, action)

    def update_owner(self, new_owner: str, caller: str) -> str:
        """
        Hand ownership to new_owner. Takes effect for the very next call.

        Raises:
            NotAuthorizedError: If caller is not the current owner
            InvalidInputError: If new_owner is empty
        """
        self.require_owner(caller, "update the DAO owner")
        if not new_owner or not new_owner.strip():
            raise InvalidInputError("New owner must be a non-empty principal", "new_owner")

        previous = self._owner
        self._owner = new_owner
        logger.info(f"DAO ownership transferred from {previous} to {new_owner}")
        return self._owner
