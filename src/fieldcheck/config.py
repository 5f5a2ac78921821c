"""
fieldcheck configuration.

Settings are Pydantic-validated and read from environment variables
(``FIELDCHECK_`` prefix, ``__`` between nested keys), e.g.
``FIELDCHECK_SOLVER__TIMEOUT_MS=2000``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SolverConfig(BaseModel):
    # Per-check bound; an expired check is reported as undecided
    timeout_ms: int = Field(default=5000, ge=1)
    # Re-check violated constraints without the observed values and attach
    # the resulting assignment as a witness
    witness_on_violation: bool = False


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "console"  # "console" | "json"


class FieldCheckSettings(BaseSettings):
    """
    Root configuration, overridable by env vars.
    """

    model_config = SettingsConfigDict(
        env_prefix="FIELDCHECK_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    solver: SolverConfig = Field(default_factory=SolverConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(**overrides: Any) -> FieldCheckSettings:
    """
    Build settings from the environment, with keyword overrides on top.
    """
    return FieldCheckSettings(**overrides)
