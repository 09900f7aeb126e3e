from typing import Sequence

from skillmap.ai.types import ChatMessage, DialogueInteraction
from skillmap.dialogue import taxonomy_prompt, unmapped_categories
from skillmap.taxonomy import Taxonomy


def build_skill_list(taxonomy: Taxonomy) -> str:
    lines = []
    for category, skills in taxonomy.categories.items():
        lines.append(f"{category}: {', '.join(skills)}")
    return "\n".join(lines)


def build_classification_messages(text: str, taxonomy: Taxonomy) -> list[ChatMessage]:
    system = (
        "You identify the skills a person demonstrated in the activity they describe.\n"
        "1. Pick the skills from the SKILLS list that the activity clearly shows. "
        "Use the exact skill names.\n"
        "2. Pick the single best CATEGORY. Use 'NO_MAP_WEAK_FIT' if the fit is weak "
        "or the description is too brief.\n"
        'Respond with JSON only: {"skills": ["..."], "category": "...", "justification": "..."}\n\n'
        f"SKILLS:\n{build_skill_list(taxonomy)}\n\n"
        f"CATEGORIES:\n{taxonomy_prompt()}"
    )
    user = f'ACTIVITY: """{text.strip()}"""'
    return [ChatMessage(role="system", content=system), ChatMessage(role="user", content=user)]


def format_history(history: Sequence[DialogueInteraction]) -> str:
    return "\n".join(
        f"Q: {item.question} | A: {item.answer} | Mapped: {item.mapped_category or 'none'}"
        for item in history
    )


def build_dialogue_messages(
    question: str,
    answer: str,
    history: Sequence[DialogueInteraction] = (),
    mapped: Sequence[str] = (),
) -> list[ChatMessage]:
    system = (
        "You are a sophisticated trait mapper and question generator.\n"
        "1. Map the answer to one TAXONOMY category. Use 'NO_MAP_WEAK_FIT' if the fit is weak.\n"
        "2. Generate a follow-up question that might tease out categories that are not mapped yet. "
        "You may use earlier answers as context.\n"
        'Respond with JSON only: {"category": "...", "justification": "...", "next_question": "..."}'
    )
    user = (
        f"QUESTION: {question.strip()}\n"
        f"ANSWER: {answer.strip()}\n"
        f"HISTORY:\n{format_history(history) or 'none'}\n"
        f"TAXONOMY:\n{taxonomy_prompt()}\n"
        f"CATEGORIES MAPPED: {', '.join(mapped) or 'none'}\n"
        f"CATEGORIES NOT MAPPED YET: {', '.join(unmapped_categories(mapped)) or 'none'}"
    )
    return [ChatMessage(role="system", content=system), ChatMessage(role="user", content=user)]
