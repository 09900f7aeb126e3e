from __future__ import annotations

import logging
from typing import Iterable

from skillmap.core.matching import MatcherThresholds

from .models import MatchResult, Taxonomy
from .similarity import similarity

logger = logging.getLogger(__name__)


class SkillMatcher:
    """Resolve free-text skill phrases to canonical taxonomy skills.

    Pure and synchronous: every method depends only on its arguments and the
    immutable taxonomy, so one instance can serve concurrent callers.
    """

    def __init__(self, taxonomy: Taxonomy, thresholds: MatcherThresholds | None = None) -> None:
        self._taxonomy = taxonomy
        self._thresholds = thresholds or MatcherThresholds()

    @property
    def taxonomy(self) -> Taxonomy:
        return self._taxonomy

    @property
    def thresholds(self) -> MatcherThresholds:
        return self._thresholds

    def score(self, text: str, skill: str) -> float:
        """Best similarity of ``text`` against a skill name and its synonyms."""
        best = similarity(text, skill)
        for synonym in self._taxonomy.synonyms_for(skill):
            best = max(best, similarity(text, synonym))
        return best

    def map_skill(self, text: str) -> MatchResult:
        normalized = (text or "").strip().lower()

        best: MatchResult | None = None
        for category, skill in self._taxonomy.pairs():
            score = self.score(normalized, skill)
            if best is None or score > best.confidence:
                best = MatchResult(skill=skill, category=category, confidence=score)

        if best is None:
            return MatchResult.empty()

        if best.confidence < self._thresholds.fallback_trigger:
            best = self._partial_word_match(normalized, best)
        return best

    def _partial_word_match(self, normalized: str, best: MatchResult) -> MatchResult:
        confidence = self._thresholds.fallback_confidence
        for token in normalized.split():
            if len(token) < self._thresholds.fallback_min_token_length:
                continue
            for category, skill in self._taxonomy.pairs():
                lowered = skill.lower()
                if token in lowered or lowered in token:
                    if confidence > best.confidence:
                        logger.debug("skill_partial_match token=%s skill=%s", token, skill)
                        best = MatchResult(skill=skill, category=category, confidence=confidence)
        return best

    def map_skills(self, texts: Iterable[str]) -> list[MatchResult]:
        """Map each phrase and keep the strongest result per canonical skill.

        Equal confidences keep the first phrase seen. The returned order
        follows first appearance of each canonical skill and is not part of
        the contract.
        """
        unique: dict[str, MatchResult] = {}
        for text in texts:
            mapped = self.map_skill(text)
            existing = unique.get(mapped.skill)
            if existing is None or mapped.confidence > existing.confidence:
                unique[mapped.skill] = mapped
        return list(unique.values())

    def normalize_skills(self, texts: Iterable[str]) -> list[str]:
        floor = self._thresholds.normalize_floor
        return [mapped.skill for mapped in self.map_skills(texts) if mapped.confidence >= floor]

    def categories(self) -> list[str]:
        return list(self._taxonomy.categories)

    def has_category(self, category: str) -> bool:
        return category in self._taxonomy.categories

    def all_skills(self) -> list[str]:
        return [skill for _, skill in self._taxonomy.pairs()]

    def skills_by_category(self, category: str) -> list[str]:
        return list(self._taxonomy.categories.get(category, ()))

    def find_skill_category(self, skill: str) -> str | None:
        for category, skills in self._taxonomy.categories.items():
            if skill in skills:
                return category
        return None

    def search_skills(self, query: str, limit: int = 10) -> list[str]:
        needle = (query or "").strip().lower()
        if not needle or limit <= 0:
            return []
        hits = [skill for skill in self.all_skills() if needle in skill.lower()]
        return hits[:limit]
