from __future__ import annotations

from typing import Iterable, Protocol

from .models import MatchResult


class TaxonomyProvider(Protocol):
    def map_skill(self, text: str) -> MatchResult:
        """Return the closest canonical skill for free text."""

    def map_skills(self, texts: Iterable[str]) -> list[MatchResult]:
        """Map a batch, one result per canonical skill."""

    def normalize_skills(self, texts: Iterable[str]) -> list[str]:
        """Return canonical names of confident matches only."""

    def find_skill_category(self, skill: str) -> str | None:
        """Return the category of an exact canonical name, if any."""
