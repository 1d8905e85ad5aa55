"""
Shared fixtures for the RAG tests.

The external models are replaced by an AsyncMock orchestrator. Its
embeddings are keyword vectors over a tiny vocabulary, so similarity
scores in the tests are easy to reason about.
"""

from unittest.mock import AsyncMock

import pytest

from app.core.config import get_settings
from app.services.llm.orchestrator import LLMOrchestrator
from tests.factories import DIMS, keyword_vector


@pytest.fixture(autouse=True)
def small_embeddings(monkeypatch):
    """Use the keyword vector size instead of the production 256 dims."""
    monkeypatch.setattr(get_settings(), "embedding_dimensions", DIMS)


@pytest.fixture
def llm():
    fake = AsyncMock(spec=LLMOrchestrator)
    fake.embed.side_effect = lambda texts, mode: [keyword_vector(t) for t in texts]
    return fake
