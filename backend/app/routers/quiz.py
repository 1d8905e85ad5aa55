"""
Quiz Router

Generates a comprehension quiz for a story. Accepts the page list (RAG
path) or, for older clients, the flat list of translated lines.
"""

import re

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from app.core.logging import get_logger
from app.services.llm.errors import GenerationFailure
from app.services.llm.models import QuizResponse
from app.services.rag import fallback_quiz, generate_quiz
from app.services.rag.models import Page

router = APIRouter()
logger = get_logger(__name__)

# "A. ", "b) ", "(C) " etc. at the start of an option
OPTION_PREFIX_PATTERN = re.compile(r"^\s*\(?[A-Da-d][.):]\s+")


class StoryLine(BaseModel):
    translated: str = ""


class QuizRequest(BaseModel):
    pages: list[Page] | None = None
    lines: list[StoryLine] | None = None  # Legacy payload
    sourceLang: str = "Hindi"


def strip_option_prefix(option: str) -> str:
    """Drop a leading letter label the model added despite instructions."""
    return OPTION_PREFIX_PATTERN.sub("", option, count=1)


def clean_quiz(quiz: QuizResponse) -> QuizResponse:
    return QuizResponse(
        questions=[
            q.model_copy(update={"options": [strip_option_prefix(o) for o in q.options]})
            for q in quiz.questions
        ]
    )


@router.post("", response_model=QuizResponse)
async def create_quiz(request: QuizRequest):
    """Generate multiple-choice questions for a story."""
    try:
        if request.pages:
            quiz = await generate_quiz(request.pages)
        elif request.lines:
            story_text = "\n".join(line.translated for line in request.lines)
            quiz = await fallback_quiz(story_text)
        else:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="pages or lines required",
            )
    except GenerationFailure as e:
        logger.error(f"[Quiz] Quiz generation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Quiz generation failed", "details": str(e)},
        )

    return clean_quiz(quiz)
