from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Sequence

from skillmap.ai.types import ClassificationResult
from skillmap.core.matching import (
    ConfidenceTiers,
    SuggestionPolicy,
    get_confidence_tiers,
    get_matcher_thresholds,
    get_suggestion_policy,
)
from skillmap.dialogue import CategoryDefinition, find_valid_category, is_weak_fit
from skillmap.schemas.skills import (
    CategorySkillStatus,
    ConfidenceTier,
    IdentifiedSkill,
    SkillSource,
    SkillStats,
    SkillStatus,
)
from skillmap.taxonomy import MatchResult, SkillMatcher, TaxonomyProvider

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SanitizedClassification:
    raw_skills: list[str] = field(default_factory=list)
    matches: list[MatchResult] = field(default_factory=list)
    category: CategoryDefinition | None = None
    weak_fit: bool = False
    justification: str | None = None

    @property
    def skills(self) -> list[str]:
        return [match.skill for match in self.matches]


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def confidence_tier(confidence: float, tiers: ConfidenceTiers | None = None) -> ConfidenceTier:
    tiers = tiers or get_confidence_tiers()
    if confidence > tiers.high:
        return "high"
    if confidence > tiers.medium:
        return "medium"
    return "low"


def suggest_skill(
    query: str,
    matcher: TaxonomyProvider,
    policy: SuggestionPolicy | None = None,
) -> MatchResult | None:
    """Best-match suggestion for a search box, or None when it is not worth showing."""
    policy = policy or get_suggestion_policy()
    if len((query or "").strip()) < policy.min_query_length:
        return None
    mapped = matcher.map_skill(query)
    if mapped.confidence > policy.min_confidence:
        return mapped
    return None


def sanitize_classification(
    result: ClassificationResult,
    matcher: TaxonomyProvider,
    *,
    floor: float | None = None,
) -> SanitizedClassification:
    """Reduce an AI classification to canonical skills and a known category."""
    floor = get_matcher_thresholds().normalize_floor if floor is None else floor
    matches = [match for match in matcher.map_skills(result.skills) if match.confidence >= floor]

    category = find_valid_category(result.category)
    if result.category and category is None:
        logger.info("classification_unknown_category category=%s", result.category)

    dropped = len(result.skills) - len(matches)
    if dropped:
        logger.debug("classification_skills_reduced removed=%s", dropped)

    return SanitizedClassification(
        raw_skills=list(result.skills),
        matches=matches,
        category=category,
        weak_fit=is_weak_fit(category),
        justification=result.justification,
    )


def build_identified_skill(
    match: MatchResult,
    source: SkillSource,
    *,
    now: str | None = None,
) -> IdentifiedSkill:
    return IdentifiedSkill(
        skill=match.skill,
        category=match.category,
        date_identified=now or _utc_now(),
        source=source,
        confidence=match.confidence,
    )


def build_identified_skills(
    matches: Iterable[MatchResult],
    source: SkillSource,
    *,
    now: str | None = None,
) -> list[IdentifiedSkill]:
    """One record per canonical skill; the first occurrence is kept."""
    stamp = now or _utc_now()
    records: dict[str, IdentifiedSkill] = {}
    for match in matches:
        if not match.skill or match.skill in records:
            continue
        records[match.skill] = build_identified_skill(match, source, now=stamp)
    return list(records.values())


RECENT_SKILLS_LIMIT = 5

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _parse_timestamp(value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def skill_stats(records: Sequence[IdentifiedSkill], *, recent_limit: int = RECENT_SKILLS_LIMIT) -> SkillStats:
    """Dashboard totals over stored skill records.

    ``recent_skills`` is newest first by ``date_identified``; equal timestamps
    keep their stored order and unparseable dates sort last.
    """
    by_category: dict[str, int] = {}
    by_source: dict[str, int] = {}
    for record in records:
        by_category[record.category] = by_category.get(record.category, 0) + 1
        by_source[record.source] = by_source.get(record.source, 0) + 1

    recent = sorted(records, key=lambda record: _parse_timestamp(record.date_identified), reverse=True)
    return SkillStats(
        total_skills=len(records),
        skills_by_category=by_category,
        skills_by_source=by_source,
        recent_skills=recent[: max(0, recent_limit)],
    )


def taxonomy_with_status(records: Iterable[IdentifiedSkill], matcher: SkillMatcher) -> list[CategorySkillStatus]:
    """Every taxonomy skill flagged with whether a record identifies it."""
    first_seen: dict[str, str] = {}
    for record in records:
        first_seen.setdefault(record.skill, record.date_identified)

    return [
        CategorySkillStatus(
            category=category,
            skills=[
                SkillStatus(name=skill, identified=skill in first_seen, date_identified=first_seen.get(skill))
                for skill in matcher.skills_by_category(category)
            ],
        )
        for category in matcher.categories()
    ]
