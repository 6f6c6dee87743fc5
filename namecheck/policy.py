"""Policy data for the evaluator: length bounds, reserved terms, emoji allow-list."""

from __future__ import annotations

from functools import cached_property

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator
import regex

MIN_VISIBLE_LENGTH = 3
MAX_VISIBLE_LENGTH = 16

DEFAULT_RESERVED_TERMS: tuple[str, ...] = ("epic", "fortnite", "admin", "mod", "staff")

DEFAULT_SAFE_EMOJI: tuple[str, ...] = (
    "\U0001F600",
    "\U0001F603",
    "\U0001F604",
    "\U0001F601",
    "\U0001F606",
    "\U0001F60A",
    "\U0001F642",
    "\U0001F525",
    "\U0001F4AF",
    "\u2b50\ufe0f",
    "\u2728",
    "\U0001F3AE",
    "\U0001F3AF",
    "\U0001F3C6",
    "\U0001F451",
    "\U0001F48E",
    "\u26a1\ufe0f",
    "\U0001F31F",
)

# VS15 / VS16 only pick text or emoji presentation of the preceding symbol.
_VARIATION_SELECTORS = frozenset({"\ufe0e", "\ufe0f"})


class Policy(BaseModel):
    """Immutable policy settings consumed by the evaluator."""

    model_config = ConfigDict(frozen=True)

    min_visible_length: int = Field(default=MIN_VISIBLE_LENGTH, ge=0)
    max_visible_length: int = Field(default=MAX_VISIBLE_LENGTH, ge=1)
    reserved_terms: tuple[str, ...] = DEFAULT_RESERVED_TERMS
    safe_emoji: tuple[str, ...] = DEFAULT_SAFE_EMOJI
    grapheme_segmentation: bool = True

    @field_validator("reserved_terms")
    @classmethod
    def validate_reserved_terms(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Strip entries and reject blanks, which would match every name."""
        terms = tuple(term.strip() for term in value)
        if any(not term for term in terms):
            raise ValueError("reserved_terms must not contain empty entries")
        return terms

    @model_validator(mode="after")
    def validate_length_bounds(self) -> "Policy":
        if self.min_visible_length > self.max_visible_length:
            raise ValueError("min_visible_length must not exceed max_visible_length")
        return self

    @cached_property
    def safe_emoji_code_points(self) -> frozenset[str]:
        """Allow-list entries reduced to single code points.

        Variation selectors are dropped so that the star-with-VS16 entry admits U+2B50.
        Entries that remain longer than one code point (ZWJ sequences) are
        kept whole and therefore never match a single character.
        """
        code_points: set[str] = set()
        for entry in self.safe_emoji:
            base = "".join(ch for ch in entry if ch not in _VARIATION_SELECTORS)
            if base:
                code_points.add(base)
        return frozenset(code_points)

    @cached_property
    def reserved_prefix_pattern(self) -> regex.Pattern[str] | None:
        """Case-insensitive pattern for names starting with a reserved term."""
        if not self.reserved_terms:
            return None
        alternatives = "|".join(regex.escape(term) for term in self.reserved_terms)
        return regex.compile(rf"(?:{alternatives})", regex.IGNORECASE)


DEFAULT_POLICY = Policy()
