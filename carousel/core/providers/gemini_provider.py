"""
Google Gemini implementation of LLMProvider.
"""
from typing import Optional

import google.generativeai as genai
from loguru import logger

from carousel.core.providers.llm_provider import LLMProvider, LLMMessage, LLMResponse
from carousel.models.enums import LLMRole


class GeminiProvider(LLMProvider):
    """
    Google Gemini implementation of LLMProvider.

    Gemini takes a single prompt, so system and user messages are folded
    into one labelled text block.
    """

    def __init__(self, api_key: str, model_name: str = "gemini-2.0-flash"):
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self._model = genai.GenerativeModel(model_name)

    async def generate_text(
        self,
        messages: list[LLMMessage],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        prompt = self._format_messages(messages)

        config = genai.GenerationConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
            response_mime_type="application/json" if json_mode else None,
        )

        logger.debug(f"Sending request to Gemini ({self.model_name}, json_mode={json_mode})")
        response = await self._model.generate_content_async(
            prompt,
            generation_config=config,
        )

        usage = None
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count,
                "completion_tokens": response.usage_metadata.candidates_token_count,
                "total_tokens": response.usage_metadata.total_token_count,
            }
            logger.debug(f"Gemini token usage: {usage}")

        return LLMResponse(content=response.text, model=self.model_name, usage=usage)

    def _format_messages(self, messages: list[LLMMessage]) -> str:
        labels = {
            LLMRole.SYSTEM: "System Instructions",
            LLMRole.USER: "User",
            LLMRole.ASSISTANT: "Assistant",
        }
        return "\n\n".join(f"{labels[msg.role]}: {msg.content}" for msg in messages)
