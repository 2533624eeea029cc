"""
Engine configuration.

Settings are read once from the environment (prefix ``TUTORMATH_``) and cached.
The matching mode is an explicit setting because the strict and permissive
policies give different verdicts on the same inputs.
"""

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchingMode(str, Enum):
    """Answer matching policy."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


class EngineSettings(BaseSettings):
    """Equivalence engine settings"""

    model_config = SettingsConfigDict(
        env_prefix="TUTORMATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Matching policy
    MATCHING_MODE: MatchingMode = MatchingMode.PERMISSIVE

    # Input bounds
    MAX_INPUT_LENGTH: int = 10_000

    # Expression parser caps
    MAX_PARSE_DEPTH: int = 64
    MAX_AST_NODES: int = 512
    MAX_TOKENS: int = 2_000


@lru_cache()
def get_settings() -> EngineSettings:
    """Get cached settings instance"""
    return EngineSettings()


def resolve_mode(mode: MatchingMode | str | None) -> MatchingMode:
    """Return ``mode`` as a MatchingMode, falling back to the configured one."""
    if mode is None:
        return get_settings().MATCHING_MODE
    if isinstance(mode, MatchingMode):
        return mode
    try:
        return MatchingMode(str(mode).lower())
    except ValueError:
        return get_settings().MATCHING_MODE
