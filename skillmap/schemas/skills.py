from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from skillmap.core.config import settings

SkillSource = Literal["image", "voice", "text"]
ConfidenceTier = Literal["high", "medium", "low"]


def check_batch_size(values: list) -> list:
    if len(values) > settings.max_batch_size:
        raise ValueError(f"at most {settings.max_batch_size} items per request")
    return values


class SkillMatch(BaseModel):
    skill: str
    category: str
    confidence: float = Field(ge=0.0, le=1.0)


class SkillMatchResponse(SkillMatch):
    tier: ConfidenceTier


class SkillMatchRequest(BaseModel):
    text: str = Field(default="", max_length=500)


class SkillBatchRequest(BaseModel):
    texts: list[str] = Field(default_factory=list)

    @field_validator("texts")
    @classmethod
    def _validate_texts(cls, value: list[str]) -> list[str]:
        return check_batch_size(value)


class NormalizeResponse(BaseModel):
    skills: list[str] = Field(default_factory=list)


class SkillLookupResponse(BaseModel):
    skill: str
    category: str | None = None


class IdentifiedSkill(BaseModel):
    """A confirmed skill as handed to storage, keyed by canonical ``skill``."""

    skill: str
    category: str
    date_identified: str
    source: SkillSource
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)


class ClassifyRequest(BaseModel):
    text: str = Field(min_length=1, max_length=8000)
    source: SkillSource = "text"

    @field_validator("text")
    @classmethod
    def _validate_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must not be blank")
        return value


class ClassifyResponse(BaseModel):
    raw_skills: list[str] = Field(default_factory=list)
    matches: list[SkillMatch] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    category: str | None = None
    weak_fit: bool = False
    justification: str | None = None
    records: list[IdentifiedSkill] = Field(default_factory=list)


class SkillRecordsRequest(BaseModel):
    records: list[IdentifiedSkill] = Field(default_factory=list)

    @field_validator("records")
    @classmethod
    def _validate_records(cls, value: list[IdentifiedSkill]) -> list[IdentifiedSkill]:
        return check_batch_size(value)


class SkillStats(BaseModel):
    total_skills: int
    skills_by_category: dict[str, int] = Field(default_factory=dict)
    skills_by_source: dict[str, int] = Field(default_factory=dict)
    recent_skills: list[IdentifiedSkill] = Field(default_factory=list)


class SkillStatus(BaseModel):
    name: str
    identified: bool = False
    date_identified: str | None = None


class CategorySkillStatus(BaseModel):
    category: str
    skills: list[SkillStatus] = Field(default_factory=list)
