"""
LLM Provider Abstraction Layer

Provides a unified interface for the text generator and the embedding
model, with a model registry and shared orchestration logic.
"""

from app.services.llm.errors import GenerationFailure
from app.services.llm.models import ChatAnswer, EmbeddingMode, QuizResponse, TopicList
from app.services.llm.orchestrator import LLMOrchestrator, extract_json, get_orchestrator
from app.services.llm.registry import MODEL_REGISTRY, get_embedding_provider, get_provider

__all__ = [
    "LLMOrchestrator",
    "get_orchestrator",
    "extract_json",
    "GenerationFailure",
    "MODEL_REGISTRY",
    "get_provider",
    "get_embedding_provider",
    "ChatAnswer",
    "EmbeddingMode",
    "QuizResponse",
    "TopicList",
]
