from dataclasses import dataclass, field
from typing import Literal, Protocol, Sequence


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


class ClassifierError(RuntimeError):
    def __init__(self, message: str, *, code: str = "upstream_error"):
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class ClassificationResult:
    skills: list[str] = field(default_factory=list)
    category: str | None = None
    justification: str | None = None
    raw: str = ""


@dataclass(frozen=True)
class DialogueInteraction:
    question: str
    answer: str
    mapped_category: str | None = None


@dataclass(frozen=True)
class DialogueTurn:
    """One mapped answer: the category the model picked and what to ask next."""

    next_question: str
    category: str | None = None
    justification: str | None = None
    raw: str = ""


class SkillClassifier(Protocol):
    async def classify(self, text: str) -> ClassificationResult: ...


class AnswerMapper(Protocol):
    async def map_answer(
        self,
        question: str,
        answer: str,
        history: Sequence[DialogueInteraction] = (),
        mapped: Sequence[str] = (),
    ) -> DialogueTurn: ...
