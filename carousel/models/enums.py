"""
Enums for type-safe values across the application.
"""
from enum import Enum


class TranscriptSourceName(str, Enum):
    """Provenance tag of the transcript source that produced a transcript."""
    NATIVE_CAPTIONS = "native-captions"
    SCRAPER_LIBRARY = "scraper-library"
    REMOTE_SCRAPER = "remote-scraper"
    AUDIO_TRANSCRIPTION = "audio-transcription"


class SourceStatus(str, Enum):
    """Outcome of a single transcript source within a resolution."""
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class ApifyMode(str, Enum):
    """How the remote scraping job is driven."""
    POLL = "poll"
    SYNC = "sync"


class SlideType(str, Enum):
    COVER = "cover"
    CONTENT = "content"


class LLMRole(str, Enum):
    """Role for LLM provider messages (OpenAI/Gemini/Groq compatible)."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class LLMProviderType(str, Enum):
    """Supported LLM provider types for configuration."""
    GEMINI = "gemini"
    GROQ = "groq"
