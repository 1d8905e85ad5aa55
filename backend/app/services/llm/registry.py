"""
Model Registry

Maps model IDs to their metadata and provider types.
Used by the orchestrator to select the correct provider per request.
"""

from app.services.llm.base import EmbeddingProvider, LLMProvider


# ── Model Registry ────────────────────────────────────────────────────────────
# Each entry maps a model_id (the value of settings.generation_model_id) to:
#   - display_name: Human-readable name, logged with each generation call
#   - provider:     Which LLMProvider class to use
#   - api_model:    The actual model string sent to the provider API

MODEL_REGISTRY: dict[str, dict] = {
    # ── OpenAI Responses API (GPT-5.x) ──
    "gpt-5-mini": {
        "display_name": "GPT-5 Mini",
        "provider": "openai_responses",
        "api_model": "gpt-5-mini",
    },
    # ── OpenAI Chat Completions API (GPT-4o) ──
    "gpt-4o": {
        "display_name": "GPT-4o",
        "provider": "openai_chat",
        "api_model": "gpt-4o",
    },
    "gpt-4o-mini": {
        "display_name": "GPT-4o Mini (Budget)",
        "provider": "openai_chat",
        "api_model": "gpt-4o-mini",
    },
}

# Default model when settings name an unknown id
DEFAULT_MODEL_ID = "gpt-4o-mini"


# ── Provider Factory ──────────────────────────────────────────────────────────

# Provider class registry (lazy-loaded singletons)
_provider_instances: dict[str, LLMProvider] = {}
_embedding_provider: EmbeddingProvider | None = None


def _create_provider(provider_type: str) -> LLMProvider:
    """Create a provider instance by type string."""
    if provider_type == "openai_responses":
        from app.services.llm.openai_responses import OpenAIResponsesProvider
        return OpenAIResponsesProvider()
    elif provider_type == "openai_chat":
        from app.services.llm.openai_chat import OpenAIChatProvider
        return OpenAIChatProvider()
    else:
        raise ValueError(f"Unknown provider type: {provider_type}")


def get_provider(model_id: str) -> tuple[LLMProvider, str]:
    """
    Get the provider instance and API model name for a given model_id.

    Args:
        model_id: The model identifier (e.g., "gpt-4o-mini")

    Returns:
        Tuple of (provider_instance, api_model_name)

    Raises:
        ValueError: If the model_id is not in the registry
    """
    if model_id not in MODEL_REGISTRY:
        raise ValueError(
            f"Unknown model: {model_id}. "
            f"Available models: {', '.join(MODEL_REGISTRY.keys())}"
        )

    model_info = MODEL_REGISTRY[model_id]
    provider_type = model_info["provider"]

    # Lazy singleton creation
    if provider_type not in _provider_instances:
        _provider_instances[provider_type] = _create_provider(provider_type)

    return _provider_instances[provider_type], model_info["api_model"]


def get_embedding_provider() -> EmbeddingProvider:
    """Get or create the embedding provider singleton."""
    global _embedding_provider
    if _embedding_provider is None:
        from app.services.llm.openai_embeddings import OpenAIEmbeddingProvider
        _embedding_provider = OpenAIEmbeddingProvider()
    return _embedding_provider
