from .categories import (
    CategoryListResponse,
    CategoryOut,
    DialogueInteractionIn,
    MapAnswerRequest,
    MapAnswerResponse,
    ProgressRequest,
    ProgressResponse,
    ResolveCategoryRequest,
    ResolveCategoryResponse,
)
from .skills import (
    ClassifyRequest,
    ClassifyResponse,
    ConfidenceTier,
    IdentifiedSkill,
    NormalizeResponse,
    SkillBatchRequest,
    SkillLookupResponse,
    SkillMatch,
    SkillMatchRequest,
    SkillMatchResponse,
    SkillRecordsRequest,
    SkillSource,
    SkillStats,
    SkillStatus,
    CategorySkillStatus,
)

__all__ = [
    "CategoryListResponse",
    "CategoryOut",
    "DialogueInteractionIn",
    "MapAnswerRequest",
    "MapAnswerResponse",
    "ProgressRequest",
    "ProgressResponse",
    "ResolveCategoryRequest",
    "ResolveCategoryResponse",
    "ClassifyRequest",
    "ClassifyResponse",
    "ConfidenceTier",
    "IdentifiedSkill",
    "NormalizeResponse",
    "SkillBatchRequest",
    "SkillLookupResponse",
    "SkillMatch",
    "SkillMatchRequest",
    "SkillMatchResponse",
    "SkillRecordsRequest",
    "SkillSource",
    "SkillStats",
    "SkillStatus",
    "CategorySkillStatus",
]
