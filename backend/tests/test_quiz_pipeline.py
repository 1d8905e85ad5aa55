"""Tests for the grounded quiz pipeline and its fallback."""

import pytest

from app.core.config import get_settings
from app.services.llm.errors import GenerationFailure
from app.services.llm.models import EmbeddingMode, QuizQuestion, QuizResponse, Topic, TopicList
from app.services.rag.quiz import generate_quiz
from tests.factories import make_page


def question(text: str, page_ref: str | None = None) -> QuizQuestion:
    return QuizQuestion(
        question=text,
        options=["Yes", "No", "Maybe", "Never"],
        correct=0,
        explanation="Because the story says so.",
        pageRef=page_ref,
    )


@pytest.fixture
def story():
    # Chunks: [1, 2, 3] (cat, cat, dog), [5] (moon), [7] (tree)
    return [
        make_page(1, "A cat sat on a mat."),
        make_page(2, "The cat napped."),
        make_page(3, "A dog barked."),
        make_page(4, illustration=True),
        make_page(5, "The moon rose."),
        make_page(6, illustration=True),
        make_page(7, "A tree grew tall."),
    ]


@pytest.fixture(autouse=True)
def two_questions(monkeypatch):
    monkeypatch.setattr(get_settings(), "quiz_question_count", 2)


@pytest.mark.asyncio
async def test_grounded_quiz_retrieves_context_per_topic(llm, story):
    grounded = QuizResponse(
        questions=[question("Why did the cat nap?", "Pages 1–5"), question("What grew?", "Pages 5–7")]
    )
    llm.generate.side_effect = [
        TopicList(
            topics=[
                Topic(topic="Why the cat napped on the mat"),
                Topic(topic="What happened under the moon near the tree"),
            ]
        ),
        grounded,
    ]

    result = await generate_quiz(story, llm=llm)

    assert result == grounded
    assert llm.generate.await_count == 2

    topics_prompt = llm.generate.await_args_list[0].args[0]
    assert "exactly 2 specific question TOPICS" in topics_prompt
    assert "[Pages 1–3]:\nA cat sat on a mat.\nThe cat napped.\nA dog barked." in topics_prompt
    assert "[Page 7]:\nA tree grew tall." in topics_prompt

    # Topic 1 matches chunk [1-3] best, then ties with [5] on 0 (story order wins)
    # Topic 2 matches [5] and [7] equally
    questions_prompt = llm.generate.await_args_list[1].args[0]
    assert "Topic: Why the cat napped on the mat" in questions_prompt
    assert "Page reference: Pages 1–5" in questions_prompt
    assert "Page reference: Pages 5–7" in questions_prompt
    assert questions_prompt.index("Why the cat napped") < questions_prompt.index("under the moon")

    modes = [call.args[1] for call in llm.embed.await_args_list]
    assert modes == [EmbeddingMode.DOCUMENT, EmbeddingMode.QUERY]
    assert llm.embed.await_args_list[1].args[0] == [
        "Why the cat napped on the mat",
        "What happened under the moon near the tree",
    ]


@pytest.mark.asyncio
async def test_empty_story_uses_fallback_exactly_once(llm):
    fallback = QuizResponse(questions=[question("What is a story?")])
    llm.generate.return_value = fallback

    result = await generate_quiz([], llm=llm)

    assert result == fallback
    llm.generate.assert_awaited_once()
    assert "Story:" in llm.generate.await_args.args[0]
    assert "Generate exactly 2 multiple-choice questions" in llm.generate.await_args.args[0]
    llm.embed.assert_not_awaited()


@pytest.mark.asyncio
async def test_illustration_only_story_uses_fallback(llm):
    llm.generate.return_value = QuizResponse(questions=[])

    await generate_quiz([make_page(1, "A cat", illustration=True)], llm=llm)

    llm.generate.assert_awaited_once()
    llm.embed.assert_not_awaited()


@pytest.mark.asyncio
async def test_grounded_failure_is_replaced_by_fallback(llm, story):
    fallback = QuizResponse(questions=[question("Who sat on the mat?")])
    llm.generate.side_effect = [
        TopicList(topics=[Topic(topic="The cat"), Topic(topic="The dog")]),
        GenerationFailure("Could not parse QuizResponse from model output"),
        fallback,
    ]

    result = await generate_quiz(story, llm=llm)

    assert result == fallback
    assert llm.generate.await_count == 3
    fallback_prompt = llm.generate.await_args_list[2].args[0]
    assert "Story:\nA cat sat on a mat.\nThe cat napped.\nA dog barked.\nThe moon rose.\nA tree grew tall." in fallback_prompt


@pytest.mark.asyncio
async def test_empty_topic_list_is_replaced_by_fallback(llm, story):
    fallback = QuizResponse(questions=[question("Who sat on the mat?")])
    llm.generate.side_effect = [TopicList(topics=[]), fallback]

    result = await generate_quiz(story, llm=llm)

    assert result == fallback
    assert llm.generate.await_count == 2
    assert "Story:" in llm.generate.await_args_list[1].args[0]
    assert "exactly 0" not in llm.generate.await_args_list[1].args[0]
    # Only the DOCUMENT-mode chunk embedding ran
    llm.embed.assert_awaited_once()


@pytest.mark.asyncio
async def test_embedding_failure_is_replaced_by_fallback(llm, story):
    llm.embed.side_effect = GenerationFailure("Embedding call failed")
    llm.generate.return_value = QuizResponse(questions=[question("Fallback?")])

    result = await generate_quiz(story, llm=llm)

    assert result.questions[0].question == "Fallback?"
    llm.generate.assert_awaited_once()


@pytest.mark.asyncio
async def test_fallback_failure_propagates(llm):
    llm.generate.side_effect = GenerationFailure("service unavailable")

    with pytest.raises(GenerationFailure, match="service unavailable"):
        await generate_quiz([], llm=llm)
