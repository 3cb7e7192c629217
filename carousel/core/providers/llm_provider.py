"""
Abstract base class for LLM providers.

Vendor-neutral interface used by concept extraction and cover titles.
Concrete implementations (Gemini, Groq) live next to this module.
"""
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, ConfigDict

from carousel.models.enums import LLMRole


class LLMMessage(BaseModel):
    """Vendor-neutral message format for LLM conversations."""

    role: LLMRole
    content: str

    model_config = ConfigDict(frozen=True)


class LLMResponse(BaseModel):
    """Standardized response from an LLM provider."""

    content: str
    model: str
    usage: Optional[dict[str, int]] = None

    model_config = ConfigDict(frozen=True)


class LLMProvider(ABC):
    """
    Abstract interface for LLM providers.

    Example:
        provider = GeminiProvider(api_key="...", model_name="gemini-2.0-flash")
        response = await provider.generate_text(
            [LLMMessage(role=LLMRole.USER, content="Return {\"ok\": true}")],
            json_mode=True,
        )
        print(response.content)
    """

    @abstractmethod
    async def generate_text(
        self,
        messages: list[LLMMessage],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        """
        Generate text completion from messages.

        Args:
            messages: List of conversation messages.
            temperature: Sampling temperature (0.0-1.0).
            max_tokens: Maximum tokens to generate (None for model default).
            json_mode: Ask the model for a single JSON object.

        Returns:
            LLMResponse containing generated content and metadata.
        """
        ...
