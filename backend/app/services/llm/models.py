"""
Pydantic response models for generator output.

These are shared across all providers — the orchestrator parses
raw LLM text into these models. Field names match the JSON the
client application reads, so they stay camelCase.
"""

from enum import Enum

from pydantic import BaseModel


class Topic(BaseModel):
    topic: str
    type: str = "multiple_choice"


class TopicList(BaseModel):
    topics: list[Topic]


class QuizQuestion(BaseModel):
    type: str = "multiple_choice"
    question: str
    options: list[str]
    correct: int  # Index into options
    explanation: str = ""
    pageRef: str | None = None  # Absent on the ungrounded path


class QuizResponse(BaseModel):
    questions: list[QuizQuestion]


class ChatAnswer(BaseModel):
    isRelevant: bool
    answer: str
    translatedAnswer: str | None = None  # Only when the question was not in English
    detectedLanguage: str = "English"


class EmbeddingMode(str, Enum):
    """Whether a text is stored in the index or used to search it."""

    DOCUMENT = "document"
    QUERY = "query"
