"""
Groq (Llama) implementation of LLMProvider.
"""
from typing import Optional

from groq import AsyncGroq
from loguru import logger

from carousel.core.providers.llm_provider import LLMProvider, LLMMessage, LLMResponse


class GroqProvider(LLMProvider):
    """
    Groq implementation of LLMProvider (OpenAI-compatible chat API).

    Example:
        provider = GroqProvider(api_key="...", model_name="llama-3.3-70b-versatile")
        response = await provider.generate_text(messages, json_mode=True)
    """

    def __init__(self, api_key: str, model_name: str = "llama-3.3-70b-versatile"):
        self.client = AsyncGroq(api_key=api_key)
        self.model_name = model_name

    async def generate_text(
        self,
        messages: list[LLMMessage],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Generate text completion using Groq."""
        extra = {"response_format": {"type": "json_object"}} if json_mode else {}

        logger.debug(f"Sending request to Groq ({self.model_name}, json_mode={json_mode})")
        response = await self.client.chat.completions.create(
            model=self.model_name,
            messages=[{"role": msg.role.value, "content": msg.content} for msg in messages],
            temperature=temperature,
            max_tokens=max_tokens,
            **extra,
        )

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }
            logger.debug(f"Groq token usage: {usage}")

        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model_name,
            usage=usage,
        )
