"""
LLM Orchestrator

Shared logic for all providers:
- JSON extraction from LLM responses (code fences, stray prose)
- Parsing raw text into a pydantic response model
- Wrapping every provider/parse problem into GenerationFailure
- Batched embedding calls

The orchestrator delegates the actual API call to the selected provider,
keeping provider implementations clean and focused on API translation.
"""

import json
import re
from typing import TypeVar

from openai import OpenAIError
from pydantic import BaseModel

from app.core.config import get_settings
from app.core.logging import get_logger
from app.services.llm.errors import GenerationFailure
from app.services.llm.models import EmbeddingMode
from app.services.llm.registry import (
    DEFAULT_MODEL_ID,
    MODEL_REGISTRY,
    get_embedding_provider,
    get_provider,
)

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def extract_json(content: str) -> str:
    """Extract JSON from response, handling markdown code blocks."""
    # Try to find JSON in code blocks
    code_block_pattern = r"```(?:json)?\s*([\s\S]*?)```"
    matches = re.findall(code_block_pattern, content, flags=re.IGNORECASE)
    if matches:
        return matches[0].strip()

    # Try to find raw JSON object
    json_pattern = r"\{[\s\S]*\}"
    matches = re.findall(json_pattern, content)
    if matches:
        # Return the longest match (most likely the full JSON)
        return max(matches, key=len)

    # Return as-is and let JSON parser handle it
    return content.strip()


class LLMOrchestrator:
    """Orchestrates generator and embedding calls with shared parsing."""

    def __init__(self, model_id: str | None = None):
        settings = get_settings()
        model_id = model_id or settings.generation_model_id
        if model_id not in MODEL_REGISTRY:
            logger.warning(f"[LLM] Unknown model {model_id!r}, using {DEFAULT_MODEL_ID}")
            model_id = DEFAULT_MODEL_ID
        self.model_id = model_id
        self.embedding_model = settings.embedding_model
        self.embedding_dimensions = settings.embedding_dimensions

    async def generate(
        self,
        prompt: str,
        response_model: type[ModelT],
        temperature: float = 0.3,
    ) -> ModelT:
        """
        Send a prompt to the configured model and parse the JSON reply.

        Args:
            prompt: Prompt text that asks for JSON only
            response_model: Pydantic model the JSON must validate against

        Returns:
            An instance of response_model

        Raises:
            GenerationFailure: On API errors, empty replies, non-JSON text
                or JSON that does not match response_model
        """
        provider, api_model = get_provider(self.model_id)

        try:
            content = await provider.generate(
                prompt=prompt,
                model=api_model,
                max_output_tokens=4000,
                temperature=temperature,
            )
        except (OpenAIError, ValueError) as e:
            raise GenerationFailure(f"Generation call failed: {e}", cause=e) from e

        logger.info(
            f"[LLM] {MODEL_REGISTRY[self.model_id]['display_name']} "
            f"(model={self.model_id} provider={provider.provider_name})"
        )
        logger.debug(f"[LLM] Content: {content[:200]}...")

        json_str = extract_json(content)
        try:
            data = json.loads(json_str)
            return response_model(**data)
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            raise GenerationFailure(
                f"Could not parse {response_model.__name__} from model output: {e}",
                cause=e,
            ) from e

    async def embed(
        self,
        texts: list[str],
        mode: EmbeddingMode,
    ) -> list[list[float] | None]:
        """
        Embed a batch of texts with the shared embedding configuration.

        The same model and dimensionality serve DOCUMENT and QUERY mode, so
        the two kinds of vectors are always comparable.
        """
        provider = get_embedding_provider()
        try:
            vectors = await provider.embed(
                texts,
                model=self.embedding_model,
                dimensions=self.embedding_dimensions,
            )
        except (OpenAIError, ValueError) as e:
            raise GenerationFailure(f"Embedding call failed: {e}", cause=e) from e

        logger.debug(
            f"[LLM] Embedded {len(texts)} {mode.value} text(s) "
            f"with {self.embedding_model} ({self.embedding_dimensions} dims)"
        )
        return vectors


# ── Singleton ─────────────────────────────────────────────────────────────────

_orchestrator: LLMOrchestrator | None = None


def get_orchestrator() -> LLMOrchestrator:
    """Get or create the LLM orchestrator singleton."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = LLMOrchestrator()
    return _orchestrator
