from functools import lru_cache

from skillmap.core.config import settings
from skillmap.core.matching import get_matcher_thresholds

from .local_taxonomy import LocalTaxonomy, TaxonomyError
from .matcher import SkillMatcher
from .models import MatchResult, Taxonomy
from .provider import TaxonomyProvider
from .similarity import levenshtein_distance, similarity


@lru_cache(maxsize=1)
def get_default_matcher() -> SkillMatcher:
    local = LocalTaxonomy(settings.skills_taxonomy_path, settings.skill_synonyms_path)
    return SkillMatcher(local.taxonomy, thresholds=get_matcher_thresholds())


__all__ = [
    "LocalTaxonomy",
    "MatchResult",
    "SkillMatcher",
    "Taxonomy",
    "TaxonomyError",
    "TaxonomyProvider",
    "get_default_matcher",
    "levenshtein_distance",
    "similarity",
]
