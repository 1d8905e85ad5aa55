"""
Embedder

Thin wrapper around the embedding model. Turns texts into fixed-size
vectors (one batched API call per list of texts) and attaches DOCUMENT
vectors to freshly built chunks.

A missing or wrong-sized vector for one text becomes an all-zero vector
instead of failing the batch: that text then scores 0 against every
query, which only costs retrieval quality for that one slot.
"""

from app.core.config import get_settings
from app.core.logging import get_logger
from app.services.llm.errors import GenerationFailure
from app.services.llm.models import EmbeddingMode
from app.services.llm.orchestrator import LLMOrchestrator, get_orchestrator
from app.services.rag.chunker import chunk_pages
from app.services.rag.models import Chunk, Page

logger = get_logger(__name__)


async def embed_texts(
    texts: list[str],
    mode: EmbeddingMode,
    llm: LLMOrchestrator | None = None,
) -> list[list[float]]:
    """
    Embed texts in one request, preserving order.

    Raises:
        GenerationFailure: If the call fails or returns no vectors at all
    """
    if not texts:
        return []

    llm = llm or get_orchestrator()
    dimensions = get_settings().embedding_dimensions

    raw = await llm.embed(texts, mode)
    if not raw or all(v is None for v in raw):
        raise GenerationFailure(
            f"Embedding response contained no vectors for {len(texts)} text(s)"
        )

    vectors: list[list[float]] = []
    for i in range(len(texts)):
        vector = raw[i] if i < len(raw) else None
        if vector is None or len(vector) != dimensions:
            logger.warning(
                f"[Embedder] Missing or malformed {mode.value} vector at index {i}; "
                f"using a zero vector"
            )
            vector = [0.0] * dimensions
        vectors.append(vector)
    return vectors


async def build_chunks_with_embeddings(
    pages: list[Page],
    llm: LLMOrchestrator | None = None,
) -> list[Chunk]:
    """Chunk the pages and attach DOCUMENT-mode embeddings to every chunk."""
    settings = get_settings()
    raw_chunks = chunk_pages(pages, max_pages=settings.max_chunk_pages)
    if not raw_chunks:
        return []

    embeddings = await embed_texts(
        [c.text for c in raw_chunks],
        EmbeddingMode.DOCUMENT,
        llm=llm,
    )
    logger.info(f"[RAG] Built {len(raw_chunks)} chunk(s) from {len(pages)} page(s)")

    return [
        chunk.model_copy(update={"embedding": embedding})
        for chunk, embedding in zip(raw_chunks, embeddings)
    ]
