"""
Quiz Pipeline

Generates multiple-choice comprehension questions, each grounded in the
part of the story it asks about.

How it works:
1. CHUNK   – pages are grouped into chunks and embedded (DOCUMENT mode)
2. TOPICS  – the generator reads all chunks and proposes N concrete topics
3. EMBED   – all topics are embedded in one call (QUERY mode)
4. RETRIEVE – each topic pulls its top-2 chunks and a combined page ref
5. WRITE   – one generator call turns every (topic, text, pageRef) into a question

If the story has no text chunks, or any step of the grounded path fails,
the whole grounded result is dropped and an ungrounded quiz is generated
from the full story text instead.
"""

from app.core.config import get_settings
from app.core.logging import get_logger
from app.services.llm.errors import GenerationFailure
from app.services.llm.models import EmbeddingMode, QuizResponse, TopicList
from app.services.llm.orchestrator import LLMOrchestrator, get_orchestrator
from app.services.rag.chunker import full_story_text
from app.services.rag.embedder import build_chunks_with_embeddings, embed_texts
from app.services.rag.models import Page
from app.services.rag.prompts import (
    compile_fallback_quiz_prompt,
    compile_grounded_quiz_prompt,
    compile_topics_prompt,
)
from app.services.rag.retriever import build_retrieval_context

logger = get_logger(__name__)


async def fallback_quiz(
    story_text: str,
    llm: LLMOrchestrator | None = None,
) -> QuizResponse:
    """
    Ungrounded quiz over the whole story.

    Raises:
        GenerationFailure: There is no further fallback, so callers surface it
    """
    llm = llm or get_orchestrator()
    count = get_settings().quiz_question_count
    logger.info(f"[Quiz] Generating {count} ungrounded question(s)")
    return await llm.generate(compile_fallback_quiz_prompt(story_text, count), QuizResponse)


async def _grounded_quiz(pages: list[Page], llm: LLMOrchestrator) -> QuizResponse | None:
    """Run the retrieval-grounded path; None means there was nothing to retrieve."""
    settings = get_settings()
    count = settings.quiz_question_count

    chunks = await build_chunks_with_embeddings(pages, llm=llm)
    if not chunks:
        return None

    topic_list = await llm.generate(compile_topics_prompt(chunks, count), TopicList)
    topics = [t.topic for t in topic_list.topics]
    if not topics:
        raise GenerationFailure("Generator returned no topics")
    if len(topics) != count:
        logger.warning(f"[Quiz] Asked for {count} topics, got {len(topics)}")

    topic_embeddings = await embed_texts(topics, EmbeddingMode.QUERY, llm=llm)
    contexts = [
        build_retrieval_context(topic, embedding, chunks, settings.quiz_top_k)
        for topic, embedding in zip(topics, topic_embeddings)
    ]
    for ctx in contexts:
        logger.debug(f"[Quiz] {ctx.pageRef} (score {ctx.top_score:.3f}) <- {ctx.queryText}")

    return await llm.generate(compile_grounded_quiz_prompt(contexts), QuizResponse)


async def generate_quiz(
    pages: list[Page],
    llm: LLMOrchestrator | None = None,
) -> QuizResponse:
    """
    Generate a quiz for a story, grounded in retrieved chunks when possible.

    Args:
        pages: The story's pages in reading order

    Returns:
        QuizResponse with one question per topic (grounded questions carry pageRef)

    Raises:
        GenerationFailure: Only if the ungrounded fallback also fails
    """
    llm = llm or get_orchestrator()

    try:
        result = await _grounded_quiz(pages, llm)
    except GenerationFailure as e:
        logger.warning(f"[Quiz] RAG quiz failed, falling back: {e}")
        result = None
    else:
        if result is None:
            logger.info("[Quiz] No text chunks produced from pages, falling back")

    if result is not None:
        return result
    return await fallback_quiz(full_story_text(pages), llm=llm)
