from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Optional, Sequence

from openai import AsyncOpenAI, OpenAIError

from skillmap.ai.prompts import build_classification_messages, build_dialogue_messages
from skillmap.ai.types import (
    ChatMessage,
    ClassificationResult,
    ClassifierError,
    DialogueInteraction,
    DialogueTurn,
)
from skillmap.taxonomy import Taxonomy

logger = logging.getLogger(__name__)

_JSON_BLOCK_RE = re.compile(r"\{.*\}", re.DOTALL)


def _clean_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _load_json_object(content: str) -> dict[str, Any]:
    """Pull the JSON object out of a model answer, tolerating prose or code fences around it."""
    if not content or not content.strip():
        raise ClassifierError("Model returned an empty response", code="invalid_response")

    match = _JSON_BLOCK_RE.search(content)
    payload = match.group(0) if match else content
    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ClassifierError(f"Model returned invalid JSON: {exc}", code="invalid_response") from exc

    if not isinstance(parsed, dict):
        raise ClassifierError("Model response is not a JSON object", code="invalid_response")
    return parsed


def parse_classification(content: str) -> ClassificationResult:
    parsed = _load_json_object(content)
    if not isinstance(parsed.get("skills"), list):
        raise ClassifierError("Classifier response has no 'skills' list", code="invalid_response")

    skills = [skill for skill in (_clean_text(item) for item in parsed["skills"]) if skill]
    return ClassificationResult(
        skills=skills,
        category=_clean_text(parsed.get("category")),
        justification=_clean_text(parsed.get("justification")),
        raw=content,
    )


def parse_dialogue_turn(content: str) -> DialogueTurn:
    parsed = _load_json_object(content)
    next_question = _clean_text(parsed.get("next_question") or parsed.get("nextQuestion"))
    if not next_question:
        raise ClassifierError("Dialogue response has no 'next_question'", code="invalid_response")

    return DialogueTurn(
        next_question=next_question,
        category=_clean_text(parsed.get("category")),
        justification=_clean_text(parsed.get("justification")),
        raw=content,
    )


class OpenAIChatAdapter:
    """Shared AsyncOpenAI client setup and JSON-mode completion."""

    api_key_env = "OPENAI_API_KEY"
    default_temperature = 0.1

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 0,
        temperature: Optional[float] = None,
        client: AsyncOpenAI | None = None,
    ):
        self._model = model
        self._temperature = self.default_temperature if temperature is None else temperature
        if client is not None:
            self._client = client
            return

        key = (api_key or os.getenv(self.api_key_env) or "").strip()
        if not key:
            raise ClassifierError(f"{self.api_key_env} is missing", code="not_configured")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or self._default_base_url()),
            timeout=timeout_s,
            max_retries=max_retries,
        )

    def _default_base_url(self) -> str | None:
        return os.getenv("OPENAI_BASE_URL") or None

    @property
    def model(self) -> str:
        return self._model

    async def _complete_json(self, messages: Sequence[ChatMessage], *, purpose: str) -> str:
        payload = [{"role": m.role, "content": m.content} for m in messages]
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=payload,
                temperature=self._temperature,
                response_format={"type": "json_object"},
            )
        except OpenAIError as exc:
            logger.warning("%s_failed model=%s: %s", purpose, self._model, exc)
            raise ClassifierError(f"Model request failed: {exc}", code="upstream_error") from exc

        content = response.choices[0].message.content if response.choices else ""
        return content or ""


class OpenAIClassifier(OpenAIChatAdapter):
    def __init__(self, model: str, taxonomy: Taxonomy, **kwargs: Any):
        super().__init__(model, **kwargs)
        self._taxonomy = taxonomy

    @property
    def taxonomy(self) -> Taxonomy:
        return self._taxonomy

    async def classify(self, text: str) -> ClassificationResult:
        messages = build_classification_messages(text, self._taxonomy)
        result = parse_classification(await self._complete_json(messages, purpose="skill_classifier"))
        logger.info(
            "skill_classifier_done model=%s text_len=%s skills=%s category=%s",
            self._model,
            len(text),
            len(result.skills),
            result.category,
        )
        return result


class DialogueMapper(OpenAIChatAdapter):
    """Maps a dialogue answer onto an experience category and drafts the follow-up question."""

    default_temperature = 0.5

    async def map_answer(
        self,
        question: str,
        answer: str,
        history: Sequence[DialogueInteraction] = (),
        mapped: Sequence[str] = (),
    ) -> DialogueTurn:
        messages = build_dialogue_messages(question, answer, history, mapped)
        turn = parse_dialogue_turn(await self._complete_json(messages, purpose="dialogue_mapper"))
        logger.info("dialogue_mapper_done model=%s category=%s", self._model, turn.category)
        return turn
