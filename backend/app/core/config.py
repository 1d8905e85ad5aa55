from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # OpenAI
    openai_api_key: str = ""
    generation_model_id: str = "gpt-4o-mini"  # Must be a key of MODEL_REGISTRY

    # Embeddings (document and query vectors must share model + size)
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 256

    # Retrieval
    max_chunk_pages: int = 3
    quiz_question_count: int = 10
    quiz_top_k: int = 2
    chat_top_k: int = 3
    relevance_threshold: float = 0.3

    # URLs
    frontend_url: str = "http://localhost:5173"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
