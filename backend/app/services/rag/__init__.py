"""
RAG (Retrieval-Augmented Generation) Pipeline

Grounds the story quiz and the story chat helper in the story itself by:
1. Chunking a story's pages into small groups of text pages
2. Embedding chunks and queries with the same embedding model
3. Ranking chunks by cosine similarity and feeding the best ones to the LLM
4. Using the best similarity score to veto off-topic "relevant" answers
"""

from app.services.rag.chat import answer_question, fallback_answer
from app.services.rag.chunker import chunk_pages
from app.services.rag.embedder import build_chunks_with_embeddings, embed_texts
from app.services.rag.quiz import fallback_quiz, generate_quiz
from app.services.rag.relevance import REDIRECT_MESSAGE, apply_relevance_gate
from app.services.rag.retriever import cosine_similarity, format_page_ref, retrieve_top_k

__all__ = [
    "answer_question",
    "fallback_answer",
    "generate_quiz",
    "fallback_quiz",
    "chunk_pages",
    "build_chunks_with_embeddings",
    "embed_texts",
    "cosine_similarity",
    "retrieve_top_k",
    "format_page_ref",
    "apply_relevance_gate",
    "REDIRECT_MESSAGE",
]
