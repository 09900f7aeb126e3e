from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from skillmap.ai.types import DialogueTurn
from skillmap.dialogue import CategoryDefinition, find_valid_category, is_weak_fit

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolvedTurn:
    next_question: str
    category: CategoryDefinition | None = None
    weak_fit: bool = False
    justification: str | None = None
    mapped: list[str] = field(default_factory=list)
    newly_mapped: bool = False


def resolve_turn(turn: DialogueTurn, mapped: Sequence[str]) -> ResolvedTurn:
    """Check the model's category against the taxonomy and fold it into ``mapped``.

    Unknown names resolve to no category. The weak-fit category never counts
    as mapped.
    """
    category = find_valid_category(turn.category)
    if turn.category and category is None:
        logger.info("dialogue_unknown_category category=%s", turn.category)

    weak_fit = is_weak_fit(category)
    updated = list(mapped)
    newly_mapped = False
    if category is not None and not weak_fit and category.category not in updated:
        updated.append(category.category)
        newly_mapped = True

    return ResolvedTurn(
        next_question=turn.next_question,
        category=category,
        weak_fit=weak_fit,
        justification=turn.justification,
        mapped=updated,
        newly_mapped=newly_mapped,
    )
