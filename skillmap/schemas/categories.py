from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .skills import check_batch_size


class CategoryOut(BaseModel):
    category: str
    description: str
    stamps: str
    icon: str | None = None


class CategoryListResponse(BaseModel):
    initial_prompt: str
    categories: list[CategoryOut] = Field(default_factory=list)


class ResolveCategoryRequest(BaseModel):
    name: str = Field(default="", max_length=200)


class ResolveCategoryResponse(BaseModel):
    category: CategoryOut | None = None
    weak_fit: bool = False


class ProgressRequest(BaseModel):
    mapped: list[str] = Field(default_factory=list)

    @field_validator("mapped")
    @classmethod
    def _validate_mapped(cls, value: list[str]) -> list[str]:
        return check_batch_size(value)


class ProgressResponse(BaseModel):
    mapped_count: int
    total: int
    completion_percentage: int
    unmapped: list[str] = Field(default_factory=list)
    complete: bool = False


class DialogueInteractionIn(BaseModel):
    question: str = Field(max_length=2000)
    answer: str = Field(max_length=8000)
    mapped_category: str | None = Field(default=None, max_length=200)


class MapAnswerRequest(BaseModel):
    question: str = Field(min_length=1, max_length=2000)
    answer: str = Field(min_length=1, max_length=8000)
    history: list[DialogueInteractionIn] = Field(default_factory=list)
    mapped: list[str] = Field(default_factory=list)

    @field_validator("answer")
    @classmethod
    def _validate_answer(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("answer must not be blank")
        return value

    @field_validator("history", "mapped")
    @classmethod
    def _validate_lists(cls, value: list) -> list:
        return check_batch_size(value)


class MapAnswerResponse(BaseModel):
    category: CategoryOut | None = None
    weak_fit: bool = False
    justification: str | None = None
    next_question: str
    mapped: list[str] = Field(default_factory=list)
    newly_mapped: bool = False
    completion_percentage: int
    complete: bool = False
