from contextlib import asynccontextmanager
import logging

from skillmap.core.matching import get_matching_config
from skillmap.taxonomy import get_default_matcher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    get_matching_config()
    matcher = get_default_matcher()
    app.state.matcher = matcher
    logger.info(
        "skill_matcher_ready categories=%s skills=%s",
        len(matcher.taxonomy.categories),
        len(matcher.taxonomy),
    )
    yield
