import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from skillmap.ai.types import ClassifierError, SkillClassifier
from skillmap.api.deps import get_classifier, get_matcher, upstream_error
from skillmap.core.config import settings
from skillmap.core.rate_limit import rate_limit
from skillmap.core.security import require_api_key
from skillmap.schemas.skills import (
    CategorySkillStatus,
    ClassifyRequest,
    ClassifyResponse,
    NormalizeResponse,
    SkillBatchRequest,
    SkillLookupResponse,
    SkillMatch,
    SkillMatchRequest,
    SkillMatchResponse,
    SkillRecordsRequest,
    SkillStats,
)
from skillmap.services.skill_service import (
    build_identified_skills,
    confidence_tier,
    sanitize_classification,
    skill_stats,
    suggest_skill,
    taxonomy_with_status,
)
from skillmap.taxonomy import MatchResult, SkillMatcher

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_api_key)])


def _match_response(match: MatchResult) -> SkillMatchResponse:
    return SkillMatchResponse(**match.as_dict(), tier=confidence_tier(match.confidence))


@router.post("/skills/match", response_model=SkillMatchResponse)
@rate_limit()
async def match_skill(
    request: Request,
    payload: SkillMatchRequest,
    matcher: SkillMatcher = Depends(get_matcher),
):
    _ = request
    return _match_response(matcher.map_skill(payload.text))


@router.post("/skills/match-batch", response_model=list[SkillMatch])
@rate_limit()
async def match_skills(
    request: Request,
    payload: SkillBatchRequest,
    matcher: SkillMatcher = Depends(get_matcher),
):
    _ = request
    return [SkillMatch(**match.as_dict()) for match in matcher.map_skills(payload.texts)]


@router.post("/skills/normalize", response_model=NormalizeResponse)
@rate_limit()
async def normalize_skills(
    request: Request,
    payload: SkillBatchRequest,
    matcher: SkillMatcher = Depends(get_matcher),
):
    _ = request
    return NormalizeResponse(skills=matcher.normalize_skills(payload.texts))


@router.get("/skills/suggest", response_model=SkillMatchResponse | None)
@rate_limit()
async def suggest(
    request: Request,
    q: str = Query(default="", max_length=500),
    matcher: SkillMatcher = Depends(get_matcher),
):
    _ = request
    match = suggest_skill(q, matcher)
    return _match_response(match) if match else None


@router.get("/skills", response_model=list[str])
@rate_limit()
async def list_skills(
    request: Request,
    q: str | None = Query(default=None, max_length=500),
    limit: int = Query(default=10, ge=1, le=100),
    matcher: SkillMatcher = Depends(get_matcher),
):
    _ = request
    if q is None:
        return matcher.all_skills()
    return matcher.search_skills(q, limit=limit)


@router.get("/skills/categories", response_model=dict[str, list[str]])
@rate_limit()
async def list_skill_categories(request: Request, matcher: SkillMatcher = Depends(get_matcher)):
    _ = request
    return {category: matcher.skills_by_category(category) for category in matcher.categories()}


@router.get("/skills/categories/{category}", response_model=list[str])
@rate_limit()
async def skills_for_category(
    request: Request,
    category: str,
    matcher: SkillMatcher = Depends(get_matcher),
):
    _ = request
    if not matcher.has_category(category):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown category '{category}'.")
    return matcher.skills_by_category(category)


@router.get("/skills/lookup/{skill}", response_model=SkillLookupResponse)
@rate_limit()
async def lookup_skill(request: Request, skill: str, matcher: SkillMatcher = Depends(get_matcher)):
    _ = request
    return SkillLookupResponse(skill=skill, category=matcher.find_skill_category(skill))


@router.post("/skills/stats", response_model=SkillStats)
@rate_limit()
async def stats(request: Request, payload: SkillRecordsRequest):
    _ = request
    return skill_stats(payload.records)


@router.post("/skills/status", response_model=list[CategorySkillStatus])
@rate_limit()
async def status_by_category(
    request: Request,
    payload: SkillRecordsRequest,
    matcher: SkillMatcher = Depends(get_matcher),
):
    _ = request
    return taxonomy_with_status(payload.records, matcher)


@router.post("/skills/classify", response_model=ClassifyResponse)
@rate_limit(settings.classify_rate_limit)
async def classify(
    request: Request,
    payload: ClassifyRequest,
    matcher: SkillMatcher = Depends(get_matcher),
    classifier: SkillClassifier = Depends(get_classifier),
):
    _ = request
    try:
        result = await classifier.classify(payload.text)
    except ClassifierError as exc:
        logger.warning("skill_classify_failed code=%s: %s", exc.code, exc)
        raise upstream_error(exc) from exc

    sanitized = sanitize_classification(result, matcher)
    return ClassifyResponse(
        raw_skills=sanitized.raw_skills,
        matches=[SkillMatch(**match.as_dict()) for match in sanitized.matches],
        skills=sanitized.skills,
        category=sanitized.category.category if sanitized.category else None,
        weak_fit=sanitized.weak_fit,
        justification=sanitized.justification,
        records=build_identified_skills(sanitized.matches, payload.source),
    )
