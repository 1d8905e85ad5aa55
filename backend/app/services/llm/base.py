"""
Abstract base classes for all model providers.

Each provider implements the API-specific translation layer.
JSON extraction and parsing are handled by the orchestrator.
"""

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """Abstract base class for all text generation providers."""

    provider_name: str = "base"

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        model: str,
        max_output_tokens: int = 4000,
        temperature: float = 0.3,
    ) -> str:
        """
        Send a single JSON-requesting prompt to the LLM and return raw text.

        Args:
            prompt: The full prompt, including the expected JSON shape
            model: The API model identifier (e.g., "gpt-4o-mini")
            max_output_tokens: Maximum tokens in the response
            temperature: Sampling temperature

        Returns:
            Raw text response from the LLM
        """
        ...


class EmbeddingProvider(ABC):
    """Abstract base class for embedding providers."""

    provider_name: str = "base"

    @abstractmethod
    async def embed(
        self,
        texts: list[str],
        model: str,
        dimensions: int,
    ) -> list[list[float] | None]:
        """
        Embed a batch of texts in one request.

        Returns one entry per input text, in input order. An entry is None
        when the API response had nothing for that index.
        """
        ...
