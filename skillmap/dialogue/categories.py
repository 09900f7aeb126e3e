from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, slots=True)
class CategoryDefinition:
    category: str
    description: str
    stamps: str
    icon: str | None = None


CATEGORY_TAXONOMY: tuple[CategoryDefinition, ...] = (
    CategoryDefinition(
        category="Human Skills (Durable)",
        description="Interpersonal, emotional, and cognitive traits that AI can't replicate",
        stamps=(
            "Leading with Empathy - Conflict Navigation - Curiosity in Action - "
            "Speaking Up for What's Right"
        ),
        icon="people",
    ),
    CategoryDefinition(
        category="Meta-Learning & Self-Awareness",
        description="Learning how to learn; adapting in real-time",
        stamps="Learning from Failure - Reframing Feedback - Time I Pivoted - Curating My Strengths",
        icon="psychology",
    ),
    CategoryDefinition(
        category="Maker & Builder Skills",
        description="Tactile, creative, or constructive projects",
        stamps=(
            "Built Something with My Hands - DIY or Maker Showcase - Coding or Game Design Sprint - "
            "Organized a Community Project"
        ),
        icon="build",
    ),
    CategoryDefinition(
        category="Civic & Community Impact",
        description="Actions that show care for others or collective systems",
        stamps=(
            "Showed Up for My People - Volunteering or Advocacy - Family Responsibilities - "
            "Bridging Cultures"
        ),
        icon="volunteer-activism",
    ),
    CategoryDefinition(
        category="Creative Expression & Communication",
        description="Use of language, art, or performance to express ideas",
        stamps=(
            "Published Something - Designed an Experience - Spoken Word / Theatre / Music - "
            "Public Speaking Moment"
        ),
        icon="palette",
    ),
    CategoryDefinition(
        category="Problem-Solving & Systems Thinking",
        description="Navigating complexity or ambiguity",
        stamps=(
            "Solved a Problem Without a Clear Answer - My Role in a Team Crisis - Optimized a Process - "
            "Designed a Better Way"
        ),
        icon="lightbulb",
    ),
    CategoryDefinition(
        category="Work & Entrepreneurial Experience",
        description="Paid, unpaid, gig, and hustle-based learning",
        stamps=(
            "Ran a Side Hustle - Work-Study or Part-Time Job - Supported a Business or Startup - "
            "Managed a Budget"
        ),
        icon="business-center",
    ),
    CategoryDefinition(
        category="Future Self & Directionality",
        description="Purpose, values, and vision",
        stamps=(
            "My Personal Mission Statement - Imagining My Future Life - When I Realized What I Want to Do - "
            "Values I Live By"
        ),
        icon="explore",
    ),
)

NO_OP_CATEGORY = "NO_MAP_WEAK_FIT"

NO_OP_DEFINITION = CategoryDefinition(
    category=NO_OP_CATEGORY,
    description=(
        "Use this category if and only if the user's answer does not clearly, obviously, and rigorously "
        "map to any other category, or if the user's answer is too brief/generic to draw a strong "
        "conclusion. This choice will result in no UI update."
    ),
    stamps="NO_OP_EXPERIENCE",
)

ALL_CATEGORIES: tuple[CategoryDefinition, ...] = (*CATEGORY_TAXONOMY, NO_OP_DEFINITION)

TOTAL_CATEGORIES = len(CATEGORY_TAXONOMY)

INITIAL_PROMPT = "Tell me what you are typically doing when you lose track of time"


def taxonomy_prompt() -> str:
    return "\n".join(
        f"{item.category}: {item.description} | Sample Experience Stamps: {item.stamps}"
        for item in ALL_CATEGORIES
    )


def unmapped_categories(mapped: Iterable[str]) -> list[str]:
    mapped_names = set(mapped)
    return [item.category for item in CATEGORY_TAXONOMY if item.category not in mapped_names]


def find_valid_category(name: str | None) -> CategoryDefinition | None:
    """Resolve a loosely spelled category name, e.g. one returned by the AI.

    Containment in either direction, case-insensitive, first category wins.
    """
    normalized = (name or "").strip().lower()
    if not normalized:
        return None
    for item in ALL_CATEGORIES:
        candidate = item.category.strip().lower()
        if normalized in candidate or candidate in normalized:
            return item
    return None


def is_weak_fit(category: CategoryDefinition | None) -> bool:
    return category is not None and category.category == NO_OP_CATEGORY


def completion_percentage(mapped_count: int) -> int:
    ratio = max(0, mapped_count) / TOTAL_CATEGORIES * 100
    return int(math.floor(ratio + 0.5))
