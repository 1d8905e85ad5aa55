"""
Story Chat Pipeline

Answers one free-form question about a story, in the child's language
when it is not English, and redirects questions that are not about the
story.

How it works:
1. The story is chunked and embedded; the question is embedded (QUERY mode).
2. The top-3 chunks and the best similarity score go into the prompt.
3. The generator answers and judges relevance itself.
4. The relevance gate overrides a "relevant" verdict if the score is too low.

With no text chunks, or if the grounded path fails, the question is
answered from the full story text with no score and no gate.
"""

from app.core.config import get_settings
from app.core.logging import get_logger
from app.services.llm.errors import GenerationFailure
from app.services.llm.models import ChatAnswer, EmbeddingMode
from app.services.llm.orchestrator import LLMOrchestrator, get_orchestrator
from app.services.rag.chunker import full_story_text
from app.services.rag.embedder import build_chunks_with_embeddings, embed_texts
from app.services.rag.models import Page
from app.services.rag.prompts import compile_fallback_chat_prompt, compile_grounded_chat_prompt
from app.services.rag.relevance import apply_relevance_gate
from app.services.rag.retriever import build_retrieval_context

logger = get_logger(__name__)


async def fallback_answer(
    question: str,
    story_text: str,
    llm: LLMOrchestrator | None = None,
) -> ChatAnswer:
    """
    Answer from the whole story text.

    Raises:
        GenerationFailure: There is no further fallback, so callers surface it
    """
    llm = llm or get_orchestrator()
    return await llm.generate(compile_fallback_chat_prompt(question, story_text), ChatAnswer)


async def _grounded_answer(
    question: str,
    pages: list[Page],
    llm: LLMOrchestrator,
) -> ChatAnswer | None:
    settings = get_settings()

    chunks = await build_chunks_with_embeddings(pages, llm=llm)
    if not chunks:
        return None

    [question_embedding] = await embed_texts([question], EmbeddingMode.QUERY, llm=llm)
    context = build_retrieval_context(question, question_embedding, chunks, settings.chat_top_k)
    logger.info(
        f"[Chat] Retrieved {len(context.topScoredChunks)} chunk(s), "
        f"top score {context.top_score:.3f} ({context.pageRef})"
    )

    answer = await llm.generate(compile_grounded_chat_prompt(question, context), ChatAnswer)
    return apply_relevance_gate(answer, context.top_score, settings.relevance_threshold)


async def answer_question(
    question: str,
    pages: list[Page],
    llm: LLMOrchestrator | None = None,
) -> ChatAnswer:
    """
    Answer a question about a story.

    Returns:
        ChatAnswer with isRelevant, answer, translatedAnswer, detectedLanguage

    Raises:
        GenerationFailure: Only if the full-text fallback also fails
    """
    llm = llm or get_orchestrator()

    try:
        answer = await _grounded_answer(question, pages, llm)
    except GenerationFailure as e:
        logger.warning(f"[Chat] RAG answer failed, falling back: {e}")
        answer = None
    else:
        if answer is None:
            logger.info("[Chat] No text chunks produced from pages, falling back")

    if answer is not None:
        return answer
    return await fallback_answer(question, full_story_text(pages), llm=llm)
