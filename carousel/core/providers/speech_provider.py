"""
Abstract base class for hosted speech-to-text providers.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SpeechSegment(BaseModel):
    text: str
    start: float  # Seconds
    end: float  # Seconds

    model_config = ConfigDict(frozen=True)


class SpeechResult(BaseModel):
    """Standardized result of a transcription job."""

    text: str
    language: Optional[str] = None
    duration: Optional[float] = None  # Seconds
    segments: list[SpeechSegment] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class SpeechToTextError(Exception):
    """The provider reported a failed transcription job."""


class SpeechToTextProvider(ABC):
    """
    Uploads a local audio file and waits for the transcription.

    Implementations detect the spoken language automatically and raise
    ``SpeechToTextError`` when the service reports a failed job.
    """

    @abstractmethod
    async def transcribe(self, audio_path: Path) -> SpeechResult:
        ...


class SpeechToTextConnectionError(SpeechToTextError):
    """The provider could not be reached; the job never ran."""
