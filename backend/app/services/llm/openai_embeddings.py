"""
OpenAI Embeddings API Provider

- client.embeddings.create(input=[...], dimensions=N)
- one request per batch of texts
- response.data[i].index / response.data[i].embedding
"""

from openai import AsyncOpenAI

from app.core.config import get_settings
from app.services.llm.base import EmbeddingProvider

settings = get_settings()


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Provider for OpenAI text-embedding-3 models."""

    provider_name = "openai_embeddings"

    def __init__(self):
        self.client = AsyncOpenAI(api_key=settings.openai_api_key)

    async def embed(
        self,
        texts: list[str],
        model: str,
        dimensions: int,
    ) -> list[list[float] | None]:
        response = await self.client.embeddings.create(
            model=model,
            input=texts,
            dimensions=dimensions,
        )

        # Place vectors by their reported index, not by list position
        vectors: list[list[float] | None] = [None] * len(texts)
        for item in response.data or []:
            if 0 <= item.index < len(texts):
                vectors[item.index] = list(item.embedding)
        return vectors
