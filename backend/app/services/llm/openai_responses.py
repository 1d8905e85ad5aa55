"""
OpenAI Responses API Provider

Handles GPT-5.x models using the newer Responses API format:
- client.responses.create()
- input (not messages)
- text={"format": {"type": "json_object"}}
- response.output_text
"""

from openai import AsyncOpenAI

from app.core.config import get_settings
from app.services.llm.base import LLMProvider

settings = get_settings()


class OpenAIResponsesProvider(LLMProvider):
    """Provider for OpenAI Responses API (GPT-5.x models)."""

    provider_name = "openai_responses"

    def __init__(self):
        self.client = AsyncOpenAI(api_key=settings.openai_api_key)

    async def generate(
        self,
        prompt: str,
        model: str,
        max_output_tokens: int = 4000,
        temperature: float = 0.3,
    ) -> str:
        # Reasoning models reject temperature, so it is not forwarded
        response = await self.client.responses.create(
            model=model,
            input=[
                {
                    "role": "user",
                    "content": prompt,
                },
            ],
            text={"format": {"type": "json_object"}},
            max_output_tokens=max_output_tokens,
        )

        content = response.output_text
        if not content:
            raise ValueError("Empty response from OpenAI Responses API")
        return content
