from fastapi import APIRouter, Depends

from skillmap.api.deps import get_matcher
from skillmap.taxonomy import SkillMatcher

router = APIRouter()


@router.get("/health", summary="Health Check", description="Report liveness and the size of the loaded taxonomy.")
async def health_check(matcher: SkillMatcher = Depends(get_matcher)):
    return {
        "status": "healthy",
        "categories": len(matcher.taxonomy.categories),
        "skills": len(matcher.taxonomy),
    }
