"""
OpenAI Chat Completions API Provider

Handles GPT-4o, GPT-4o-mini, and other Chat Completions API models:
- client.chat.completions.create()
- messages (not input)
- response_format={"type": "json_object"}
- response.choices[0].message.content
"""

from openai import AsyncOpenAI

from app.core.config import get_settings
from app.services.llm.base import LLMProvider

settings = get_settings()


class OpenAIChatProvider(LLMProvider):
    """Provider for OpenAI Chat Completions API (GPT-4o, GPT-4o-mini, etc.)."""

    provider_name = "openai_chat"

    def __init__(self):
        self.client = AsyncOpenAI(api_key=settings.openai_api_key)

    async def generate(
        self,
        prompt: str,
        model: str,
        max_output_tokens: int = 4000,
        temperature: float = 0.3,
    ) -> str:
        response = await self.client.chat.completions.create(
            model=model,
            messages=[
                {
                    "role": "user",
                    "content": prompt,
                },
            ],
            response_format={"type": "json_object"},
            max_completion_tokens=max_output_tokens,
            temperature=temperature,
        )

        content = response.choices[0].message.content
        if not content:
            raise ValueError("Empty response from OpenAI Chat Completions API")
        return content
