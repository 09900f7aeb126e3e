from .categories import (
    ALL_CATEGORIES,
    CATEGORY_TAXONOMY,
    INITIAL_PROMPT,
    NO_OP_CATEGORY,
    NO_OP_DEFINITION,
    TOTAL_CATEGORIES,
    CategoryDefinition,
    completion_percentage,
    find_valid_category,
    is_weak_fit,
    taxonomy_prompt,
    unmapped_categories,
)

__all__ = [
    "ALL_CATEGORIES",
    "CATEGORY_TAXONOMY",
    "INITIAL_PROMPT",
    "NO_OP_CATEGORY",
    "NO_OP_DEFINITION",
    "TOTAL_CATEGORIES",
    "CategoryDefinition",
    "completion_percentage",
    "find_valid_category",
    "is_weak_fit",
    "taxonomy_prompt",
    "unmapped_categories",
]
