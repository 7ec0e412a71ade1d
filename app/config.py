"""
Application Configuration

Environment-driven settings via pydantic-settings. Every variable is read
with the RELIEF_ prefix, e.g. RELIEF_QUORUM=5.
"""
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Ledger and API settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="RELIEF_", case_sensitive=False)

    # Governance rules
    voting_period_blocks: int = Field(default=144, ge=1)  # ~1 day of blocks
    quorum: int = Field(default=3, ge=1)
    initial_owner: str = "deployer"
    open_deposits: bool = False

    # Claim text limits
    max_description_length: int = Field(default=500, ge=1)
    max_category_length: int = Field(default=50, ge=1)

    # API
    cors_origins: List[str] = ["*"]

    # Observability
    log_level: str = "INFO"

    @field_validator("initial_owner")
    @classmethod
    def owner_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("initial_owner must not be blank")
        return v

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
