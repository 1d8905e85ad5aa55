"""
RAG Retriever

In-memory similarity search over one story's chunks. There is no vector
store: every request embeds its own chunks, so retrieval is a pure
function of the query vector and the chunk list.

How retrieval works:
1. Every chunk embedding is compared with the query vector (cosine similarity).
2. Chunks are ranked by score, highest first; ties keep story order.
3. The top-K chunks and their combined page reference are returned.
"""

import numpy as np

from app.services.rag.models import Chunk, RetrievalContext, ScoredChunk


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine similarity of two vectors; 0.0 when either has zero magnitude."""
    vec_a = np.asarray(a, dtype=float)
    vec_b = np.asarray(b, dtype=float)
    if vec_a.size == 0 or vec_a.shape != vec_b.shape:
        return 0.0
    norm_a = np.linalg.norm(vec_a)
    norm_b = np.linalg.norm(vec_b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.clip(np.dot(vec_a, vec_b) / (norm_a * norm_b), -1.0, 1.0))


def _score_matrix(query_embedding: list[float], chunks: list[Chunk]) -> np.ndarray:
    """Cosine score of every chunk against the query, in chunk order."""
    query = np.asarray(query_embedding, dtype=float)
    # Chunks with no (or wrong-sized) embedding get a zero row and score 0
    matrix = np.vstack([
        np.asarray(c.embedding, dtype=float)
        if c.embedding is not None and len(c.embedding) == query.size
        else np.zeros(query.size)
        for c in chunks
    ])
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    safe_norms = np.where(norms == 0, 1.0, norms)
    scores = np.where(norms == 0, 0.0, dots / safe_norms)
    return np.clip(scores, -1.0, 1.0)


def retrieve_top_k(
    query_embedding: list[float],
    chunks: list[Chunk],
    k: int,
) -> list[ScoredChunk]:
    """
    Rank chunks against a query vector.

    Args:
        query_embedding: QUERY-mode vector
        chunks: Chunks with DOCUMENT-mode embeddings attached
        k: Number of chunks to return

    Returns:
        Up to k scored chunks, descending by score. The sort is stable,
        so equal scores keep their original chunk order.
    """
    if not chunks or k <= 0:
        return []

    scores = _score_matrix(query_embedding, chunks)
    order = np.argsort(-scores, kind="stable")[:k]
    return [ScoredChunk(chunk=chunks[i], score=float(scores[i])) for i in order]


def format_page_ref(page_nums: list[int]) -> str:
    """
    Human-readable page reference.

    [5] -> "Page 5", [3, 4, 5] -> "Pages 3–5". Only the first and last
    page are shown, so gaps are not indicated.
    """
    if not page_nums:
        return ""
    if len(page_nums) == 1:
        return f"Page {page_nums[0]}"
    return f"Pages {min(page_nums)}–{max(page_nums)}"


def combined_page_ref(scored: list[ScoredChunk]) -> str:
    """Page reference over the union of pages of several retrieved chunks."""
    page_nums = sorted({n for s in scored for n in s.chunk.pageNums})
    return format_page_ref(page_nums)


def build_retrieval_context(
    query_text: str,
    query_embedding: list[float],
    chunks: list[Chunk],
    k: int,
) -> RetrievalContext:
    """Retrieve the top-k chunks for one query and bundle them for prompting."""
    top = retrieve_top_k(query_embedding, chunks, k)
    return RetrievalContext(
        queryText=query_text,
        topScoredChunks=top,
        pageRef=combined_page_ref(top),
    )
