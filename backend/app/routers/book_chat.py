"""
Book Chat Router

Answers a child's question about the story they are reading.
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from app.core.logging import get_logger
from app.services.llm.errors import GenerationFailure
from app.services.llm.models import ChatAnswer
from app.services.rag import answer_question, fallback_answer
from app.services.rag.models import Page

router = APIRouter()
logger = get_logger(__name__)


class BookChatRequest(BaseModel):
    question: str = ""
    pages: list[Page] | None = None
    storyText: str | None = None  # Legacy payload: full text, no retrieval


@router.post("", response_model=ChatAnswer)
async def book_chat(request: BookChatRequest):
    """Answer a question about the story, or redirect if it is off-topic."""
    question = request.question.strip()
    if not question or not (request.pages or request.storyText):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="question and pages or storyText required",
        )

    try:
        if request.pages:
            return await answer_question(question, request.pages)
        return await fallback_answer(question, request.storyText)
    except GenerationFailure as e:
        logger.error(f"[Chat] Book chat failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Chat failed", "details": str(e)},
        )
