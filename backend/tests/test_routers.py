"""Tests for the /api/quiz and /api/book-chat endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.routers.quiz import strip_option_prefix
from app.services.llm.errors import GenerationFailure
from app.services.llm.models import ChatAnswer, QuizQuestion, QuizResponse

client = TestClient(app)

PAGES = [
    {
        "pageNum": 1,
        "originalText": "Billi so gayi.",
        "translatedText": "The cat slept.",
        "vocab": [{"english": "cat", "original": "billi"}],
        "isIllustration": False,
    },
    {"pageNum": 2, "isIllustration": True},
]


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


@pytest.mark.parametrize(
    "option, expected",
    [
        ("A. The cat", "The cat"),
        ("b) A dog", "A dog"),
        ("(C) Moon", "Moon"),
        ("D: Tree", "Tree"),
        ("A cat", "A cat"),
        ("Apples", "Apples"),
    ],
)
def test_strip_option_prefix(option, expected):
    assert strip_option_prefix(option) == expected


class TestQuizEndpoint:
    def test_pages_use_grounded_pipeline_and_options_are_cleaned(self):
        quiz = QuizResponse(
            questions=[
                QuizQuestion(
                    question="What did the cat do?",
                    options=["A. Slept", "B. Ran", "C. Sang", "D. Ate"],
                    correct=0,
                    explanation="The cat slept.",
                    pageRef="Page 1",
                )
            ]
        )
        with patch("app.routers.quiz.generate_quiz", AsyncMock(return_value=quiz)) as mock_quiz:
            resp = client.post("/api/quiz", json={"pages": PAGES})

        assert resp.status_code == 200
        body = resp.json()
        assert body["questions"][0]["options"] == ["Slept", "Ran", "Sang", "Ate"]
        assert body["questions"][0]["pageRef"] == "Page 1"
        pages = mock_quiz.await_args.args[0]
        assert [p.pageNum for p in pages] == [1, 2]
        assert pages[1].isIllustration is True

    def test_legacy_lines_use_ungrounded_quiz(self):
        quiz = QuizResponse(questions=[])
        with patch("app.routers.quiz.fallback_quiz", AsyncMock(return_value=quiz)) as mock_fallback:
            resp = client.post(
                "/api/quiz",
                json={"lines": [{"translated": "The cat slept."}, {"translated": "The end."}]},
            )

        assert resp.status_code == 200
        assert resp.json() == {"questions": []}
        mock_fallback.assert_awaited_once_with("The cat slept.\nThe end.")

    def test_missing_pages_and_lines_is_bad_request(self):
        resp = client.post("/api/quiz", json={"pages": []})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "pages or lines required"

    def test_generation_failure_is_server_error(self):
        with patch(
            "app.routers.quiz.generate_quiz",
            AsyncMock(side_effect=GenerationFailure("Generation call failed: timeout")),
        ):
            resp = client.post("/api/quiz", json={"pages": PAGES})

        assert resp.status_code == 500
        assert resp.json()["detail"] == {
            "error": "Quiz generation failed",
            "details": "Generation call failed: timeout",
        }


class TestBookChatEndpoint:
    def test_pages_use_grounded_answer(self):
        answer = ChatAnswer(
            isRelevant=True,
            answer="The cat slept.",
            translatedAnswer="Billi so gayi.",
            detectedLanguage="Hindi",
        )
        with patch("app.routers.book_chat.answer_question", AsyncMock(return_value=answer)) as mock_answer:
            resp = client.post("/api/book-chat", json={"question": " Billi ne kya kiya? ", "pages": PAGES})

        assert resp.status_code == 200
        assert resp.json() == {
            "isRelevant": True,
            "answer": "The cat slept.",
            "translatedAnswer": "Billi so gayi.",
            "detectedLanguage": "Hindi",
        }
        assert mock_answer.await_args.args[0] == "Billi ne kya kiya?"

    def test_story_text_uses_full_text_answer(self):
        answer = ChatAnswer(isRelevant=True, answer="It slept.")
        with patch("app.routers.book_chat.fallback_answer", AsyncMock(return_value=answer)) as mock_fallback:
            resp = client.post("/api/book-chat", json={"question": "What did the cat do?", "storyText": "The cat slept."})

        assert resp.status_code == 200
        assert resp.json()["translatedAnswer"] is None
        assert resp.json()["detectedLanguage"] == "English"
        mock_fallback.assert_awaited_once_with("What did the cat do?", "The cat slept.")

    @pytest.mark.parametrize(
        "payload",
        [
            {"pages": PAGES},
            {"question": "   ", "storyText": "The cat slept."},
            {"question": "What did the cat do?"},
        ],
    )
    def test_missing_fields_is_bad_request(self, payload):
        resp = client.post("/api/book-chat", json=payload)
        assert resp.status_code == 400

    def test_generation_failure_is_server_error(self):
        with patch(
            "app.routers.book_chat.answer_question",
            AsyncMock(side_effect=GenerationFailure("bad JSON")),
        ):
            resp = client.post("/api/book-chat", json={"question": "Why?", "pages": PAGES})

        assert resp.status_code == 500
        assert resp.json()["detail"] == {"error": "Chat failed", "details": "bad JSON"}
