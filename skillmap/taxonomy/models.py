from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping


@dataclass(frozen=True, slots=True)
class MatchResult:
    skill: str
    category: str
    confidence: float

    @classmethod
    def empty(cls) -> MatchResult:
        return cls(skill="", category="", confidence=0.0)

    def as_dict(self) -> dict[str, str | float]:
        return {"skill": self.skill, "category": self.category, "confidence": self.confidence}


@dataclass(frozen=True)
class Taxonomy:
    """Ordered category -> canonical skills mapping plus the synonym table.

    Both mappings are frozen on construction, so one instance can be shared
    by every request for the lifetime of the process.
    """

    categories: Mapping[str, tuple[str, ...]]
    synonyms: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        categories = {
            str(category): tuple(str(skill) for skill in skills)
            for category, skills in self.categories.items()
        }
        synonyms = {
            str(skill): tuple(str(alias) for alias in aliases)
            for skill, aliases in self.synonyms.items()
        }
        object.__setattr__(self, "categories", MappingProxyType(categories))
        object.__setattr__(self, "synonyms", MappingProxyType(synonyms))

    def __len__(self) -> int:
        return sum(len(skills) for skills in self.categories.values())

    def pairs(self) -> Iterator[tuple[str, str]]:
        """Yield (category, skill) in definition order."""
        for category, skills in self.categories.items():
            for skill in skills:
                yield category, skill

    def synonyms_for(self, skill: str) -> tuple[str, ...]:
        return self.synonyms.get(skill, ())

    def orphan_synonym_keys(self) -> list[str]:
        known = {skill for _, skill in self.pairs()}
        return [key for key in self.synonyms if key not in known]

    def duplicate_skills(self) -> list[str]:
        seen: set[str] = set()
        duplicates: list[str] = []
        for _, skill in self.pairs():
            if skill in seen and skill not in duplicates:
                duplicates.append(skill)
            seen.add(skill)
        return duplicates

    def to_dict(self) -> dict[str, dict[str, list[str]]]:
        return {
            "categories": {category: list(skills) for category, skills in self.categories.items()},
            "synonyms": {skill: list(aliases) for skill, aliases in self.synonyms.items()},
        }
