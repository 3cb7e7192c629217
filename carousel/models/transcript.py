"""
Normalized transcript value types shared by every transcript source.
"""
import re
from typing import Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from carousel.core.constants import TranscriptConfig
from carousel.models.enums import SourceStatus, TranscriptSourceName

_BRACKETED = re.compile(r"\[.*?\]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(pieces: Iterable[str]) -> str:
    """
    Join caption fragments into one transcript string.

    Bracketed non-speech annotations such as "[Music]" are removed and
    whitespace is collapsed.
    """
    joined = " ".join(p for p in pieces if p)
    joined = _BRACKETED.sub("", joined)
    return _WHITESPACE.sub(" ", joined).strip()


class TranscriptSegment(BaseModel):
    text: str
    offset_ms: int = 0
    duration_ms: int = 0

    model_config = ConfigDict(frozen=True)


class Transcript(BaseModel):
    """Result of a successful resolution. Never mutated once returned."""

    text: str
    segments: Tuple[TranscriptSegment, ...] = Field(default_factory=tuple)
    video_title: str = TranscriptConfig.DEFAULT_VIDEO_TITLE
    duration_ms: int = 0
    source: TranscriptSourceName

    model_config = ConfigDict(frozen=True)

    @property
    def is_acceptable(self) -> bool:
        return len(self.text) >= TranscriptConfig.MIN_TEXT_LENGTH


class SourceOutcome(BaseModel):
    """What happened to one source during a resolution."""

    source: TranscriptSourceName
    status: SourceStatus
    reason: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def attempted(self) -> bool:
        return self.status != SourceStatus.SKIPPED


def segments_end_ms(segments: Iterable[TranscriptSegment]) -> int:
    """Best-effort duration: the end of the last segment."""
    end = 0
    for segment in segments:
        end = max(end, segment.offset_ms + segment.duration_ms)
    return end
