"""Access Control: owner gate and ownership transfer."""

import pytest

from app.core.errors import InvalidInputError, NotAuthorizedError
from app.ledger.access import AccessControl


def test_require_owner_passes_for_owner():
    AccessControl("deployer").require_owner("deployer")


def test_require_owner_rejects_others():
    with pytest.raises(NotAuthorizedError):
        AccessControl("deployer").require_owner("user1")


def test_update_owner_takes_effect_immediately():
    access = AccessControl("deployer")
    assert access.update_owner("user1", "deployer") == "user1"
    assert access.owner == "user1"
    access.require_owner("user1")
    with pytest.raises(NotAuthorizedError):
        access.require_owner("deployer")


def test_update_owner_requires_owner():
    access = AccessControl("deployer")
    with pytest.raises(NotAuthorizedError):
        access.update_owner("user2", "user1")
    assert access.owner == "deployer"


def test_update_owner_rejects_blank_principal():
    access = AccessControl("deployer")
    with pytest.raises(InvalidInputError):
        access.update_owner(" ", "deployer")
    assert access.owner == "deployer"


def test_blank_initial_owner_rejected():
    with pytest.raises(ValueError):
        AccessControl("")
