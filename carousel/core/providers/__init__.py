"""
Provider abstraction layer for hosted AI services.
"""
from carousel.core.providers.llm_provider import (
    LLMProvider,
    LLMMessage,
    LLMResponse,
)
from carousel.core.providers.speech_provider import (
    SpeechToTextProvider,
    SpeechResult,
    SpeechSegment,
    SpeechToTextError,
    SpeechToTextConnectionError,
)

__all__ = [
    # LLM
    "LLMProvider",
    "LLMMessage",
    "LLMResponse",
    # Speech-to-text
    "SpeechToTextProvider",
    "SpeechResult",
    "SpeechSegment",
    "SpeechToTextError",
    "SpeechToTextConnectionError",
]
