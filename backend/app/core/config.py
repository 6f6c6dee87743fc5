"""Application settings for the username checker service and tests."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic import model_validator
from pydantic_settings import BaseSettings

from namecheck import Policy
from namecheck import StrictnessProfile
from namecheck.policy import DEFAULT_RESERVED_TERMS
from namecheck.policy import DEFAULT_SAFE_EMOJI
from namecheck.policy import MAX_VISIBLE_LENGTH
from namecheck.policy import MIN_VISIBLE_LENGTH


class Settings(BaseSettings):
    """Typed settings loaded from environment variables or explicit kwargs."""

    namecheck_app_host: str = "127.0.0.1"
    namecheck_app_port: int = Field(default=8000, ge=1)
    namecheck_cors_allow_origins: str = "*"

    namecheck_store_backend: Literal["memory", "sqlite"] = "memory"
    namecheck_sqlite_path: str = "namecheck.db"
    namecheck_history_limit: int = Field(default=10, ge=1)
    namecheck_default_profile: StrictnessProfile = StrictnessProfile.BALANCED

    namecheck_min_visible_length: int = Field(default=MIN_VISIBLE_LENGTH, ge=0)
    namecheck_max_visible_length: int = Field(default=MAX_VISIBLE_LENGTH, ge=1)
    namecheck_reserved_terms: list[str] = Field(default_factory=lambda: list(DEFAULT_RESERVED_TERMS))
    namecheck_safe_emoji: list[str] = Field(default_factory=lambda: list(DEFAULT_SAFE_EMOJI))
    namecheck_grapheme_segmentation: bool = True

    @model_validator(mode="after")
    def validate_length_bounds(self) -> "Settings":
        """Ensure the minimum visible length does not exceed the maximum."""
        if self.namecheck_min_visible_length > self.namecheck_max_visible_length:
            raise ValueError(
                "NAMECHECK_MIN_VISIBLE_LENGTH must not exceed NAMECHECK_MAX_VISIBLE_LENGTH"
            )
        if any(not term.strip() for term in self.namecheck_reserved_terms):
            raise ValueError("NAMECHECK_RESERVED_TERMS must not contain empty entries")
        return self

    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.namecheck_cors_allow_origins.split(",") if origin.strip()]

    def policy(self) -> Policy:
        """Build the evaluator policy from configured policy data."""
        return Policy(
            min_visible_length=self.namecheck_min_visible_length,
            max_visible_length=self.namecheck_max_visible_length,
            reserved_terms=tuple(self.namecheck_reserved_terms),
            safe_emoji=tuple(self.namecheck_safe_emoji),
            grapheme_segmentation=self.namecheck_grapheme_segmentation,
        )


def load_settings() -> Settings:
    """Load settings from process environment."""
    return Settings()
