"""Settings: defaults and environment overrides."""

import pytest
from pydantic import ValidationError

from app.config import Settings


def test_defaults(monkeypatch):
    for name in ("RELIEF_QUORUM", "RELIEF_VOTING_PERIOD_BLOCKS", "RELIEF_INITIAL_OWNER"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.voting_period_blocks == 144
    assert settings.quorum == 3
    assert settings.initial_owner == "deployer"
    assert settings.open_deposits is False


def test_env_override(monkeypatch):
    monkeypatch.setenv("RELIEF_QUORUM", "5")
    monkeypatch.setenv("RELIEF_OPEN_DEPOSITS", "true")
    monkeypatch.setenv("RELIEF_LOG_LEVEL", "debug")
    settings = Settings(_env_file=None)
    assert settings.quorum == 5
    assert settings.open_deposits is True
    assert settings.log_level == "DEBUG"


def test_zero_quorum_rejected(monkeypatch):
    monkeypatch.setenv("RELIEF_QUORUM", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
