"""
Relevance Gate

The generator decides whether a question is about the story, and is also
shown the best similarity score. This gate is a one-way safety net on top
of that verdict: a "relevant" answer backed by a score below the
threshold is replaced by a gentle redirect. An "irrelevant" verdict is
never overturned.
"""

from app.core.config import get_settings
from app.core.logging import get_logger
from app.services.llm.models import ChatAnswer

logger = get_logger(__name__)

REDIRECT_MESSAGE = (
    "That's a great question, but let's focus on the story! "
    "Try asking me something about what happened in the book."
)


def is_below_threshold(score: float, threshold: float | None = None) -> bool:
    """True when score is under threshold (default: settings.relevance_threshold)."""
    if threshold is None:
        threshold = get_settings().relevance_threshold
    return score < threshold


def apply_relevance_gate(
    answer: ChatAnswer,
    top_score: float,
    threshold: float | None = None,
) -> ChatAnswer:
    """
    Override a "relevant" verdict when the best chunk scored below threshold.

    Returns a new ChatAnswer; the input is left untouched.
    """
    if threshold is None:
        threshold = get_settings().relevance_threshold
    if not answer.isRelevant or not is_below_threshold(top_score, threshold):
        return answer

    logger.info(
        f"[Chat] Overriding relevant verdict: top score {top_score:.3f} < {threshold}"
    )
    return answer.model_copy(
        update={
            "isRelevant": False,
            "answer": REDIRECT_MESSAGE,
            "translatedAnswer": None,
        }
    )
