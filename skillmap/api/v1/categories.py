import logging

from fastapi import APIRouter, Depends, Request

from skillmap.ai.types import AnswerMapper, ClassifierError, DialogueInteraction
from skillmap.api.deps import get_dialogue_mapper, upstream_error
from skillmap.core.config import settings
from skillmap.core.rate_limit import rate_limit
from skillmap.core.security import require_api_key
from skillmap.dialogue import (
    CATEGORY_TAXONOMY,
    INITIAL_PROMPT,
    TOTAL_CATEGORIES,
    CategoryDefinition,
    completion_percentage,
    find_valid_category,
    is_weak_fit,
    unmapped_categories,
)
from skillmap.schemas.categories import (
    CategoryListResponse,
    CategoryOut,
    MapAnswerRequest,
    MapAnswerResponse,
    ProgressRequest,
    ProgressResponse,
    ResolveCategoryRequest,
    ResolveCategoryResponse,
)
from skillmap.services.dialogue_service import resolve_turn

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_api_key)])


def _category_out(item: CategoryDefinition) -> CategoryOut:
    return CategoryOut(category=item.category, description=item.description, stamps=item.stamps, icon=item.icon)


@router.get("/categories", response_model=CategoryListResponse)
@rate_limit()
async def list_categories(request: Request):
    _ = request
    return CategoryListResponse(
        initial_prompt=INITIAL_PROMPT,
        categories=[_category_out(item) for item in CATEGORY_TAXONOMY],
    )


@router.post("/categories/resolve", response_model=ResolveCategoryResponse)
@rate_limit()
async def resolve_category(request: Request, payload: ResolveCategoryRequest):
    _ = request
    found = find_valid_category(payload.name)
    return ResolveCategoryResponse(
        category=_category_out(found) if found else None,
        weak_fit=is_weak_fit(found),
    )


@router.post("/categories/progress", response_model=ProgressResponse)
@rate_limit()
async def category_progress(request: Request, payload: ProgressRequest):
    _ = request
    unmapped = unmapped_categories(payload.mapped)
    mapped_count = TOTAL_CATEGORIES - len(unmapped)
    return ProgressResponse(
        mapped_count=mapped_count,
        total=TOTAL_CATEGORIES,
        completion_percentage=completion_percentage(mapped_count),
        unmapped=unmapped,
        complete=not unmapped,
    )


@router.post("/categories/map-answer", response_model=MapAnswerResponse)
@rate_limit(settings.classify_rate_limit)
async def map_answer(
    request: Request,
    payload: MapAnswerRequest,
    mapper: AnswerMapper = Depends(get_dialogue_mapper),
):
    _ = request
    history = [
        DialogueInteraction(question=item.question, answer=item.answer, mapped_category=item.mapped_category)
        for item in payload.history
    ]
    try:
        turn = await mapper.map_answer(payload.question, payload.answer, history, payload.mapped)
    except ClassifierError as exc:
        logger.warning("dialogue_map_failed code=%s: %s", exc.code, exc)
        raise upstream_error(exc) from exc

    resolved = resolve_turn(turn, payload.mapped)
    mapped_count = TOTAL_CATEGORIES - len(unmapped_categories(resolved.mapped))
    return MapAnswerResponse(
        category=_category_out(resolved.category) if resolved.category else None,
        weak_fit=resolved.weak_fit,
        justification=resolved.justification,
        next_question=resolved.next_question,
        mapped=resolved.mapped,
        newly_mapped=resolved.newly_mapped,
        completion_percentage=completion_percentage(mapped_count),
        complete=mapped_count == TOTAL_CATEGORIES,
    )
