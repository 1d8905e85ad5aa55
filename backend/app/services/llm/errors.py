"""
Errors raised by the LLM layer.

Every oracle problem (network error, empty reply, non-JSON text, JSON that
does not match the expected schema) surfaces as a GenerationFailure so the
RAG pipelines only need to handle one exception type.
"""


class GenerationFailure(RuntimeError):
    """An embedding or generation call to the external model failed."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause
