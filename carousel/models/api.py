"""
Pydantic models for API request/response schemas.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from carousel.core.constants import ConceptConfig, TranscriptConfig
from carousel.models.carousel import Concept, InstagramCopy, SlidePrompt
from carousel.models.transcript import Transcript


class TranscriptRequest(BaseModel):
    """Request model for transcript extraction."""

    url: str = Field(min_length=1)

    model_config = ConfigDict(extra="forbid")


class TranscriptResponse(BaseModel):
    """Response model for transcript extraction."""

    success: bool = True
    video_id: str
    transcript: Transcript

    model_config = ConfigDict(frozen=True)


class ProcessRequest(BaseModel):
    """Request model for carousel generation from a URL or pasted transcript."""

    url: Optional[str] = None
    transcript: Optional[str] = None
    slide_count: int = Field(
        default=ConceptConfig.DEFAULT_SLIDE_COUNT,
        ge=ConceptConfig.MIN_SLIDE_COUNT,
        le=ConceptConfig.MAX_SLIDE_COUNT,
    )

    model_config = ConfigDict(extra="forbid")

    @property
    def manual_transcript(self) -> Optional[str]:
        """Pasted transcript text, if long enough to be used instead of the URL."""
        if self.transcript and len(self.transcript.strip()) > TranscriptConfig.MIN_TEXT_LENGTH:
            return self.transcript.strip()
        return None


class ProcessTextRequest(BaseModel):
    """Request model for carousel generation from raw transcript text."""

    text: str
    slide_count: int = Field(
        default=ConceptConfig.DEFAULT_SLIDE_COUNT,
        ge=ConceptConfig.MIN_SLIDE_COUNT,
        le=ConceptConfig.MAX_SLIDE_COUNT,
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("text")
    @classmethod
    def validate_length(cls, v: str) -> str:
        """Require enough text to extract concepts from."""
        v = v.strip()
        if len(v) < TranscriptConfig.MIN_TEXT_LENGTH:
            raise ValueError(
                f"Please provide at least {TranscriptConfig.MIN_TEXT_LENGTH} characters of transcript text"
            )
        return v


class CarouselResponse(BaseModel):
    """Response model for generated carousel content."""

    success: bool = True
    video_id: str
    video_title: str
    concepts: List[Concept]
    instagram_copy: InstagramCopy
    slide_count: int
    is_demo: bool = False

    model_config = ConfigDict(frozen=True)


class SlidesRequest(BaseModel):
    """Request model for slide prompt generation."""

    concepts: List[Concept] = Field(min_length=1)
    video_id: Optional[str] = None
    video_title: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class SlidesResponse(BaseModel):
    """Response model for slide prompt generation."""

    success: bool = True
    slides: List[SlidePrompt]
    thumbnail_url: Optional[str] = None
    prompts_only: bool = True
    message: str

    model_config = ConfigDict(frozen=True)


class ThumbnailResponse(BaseModel):
    success: bool = True
    video_id: str
    thumbnail_url: str

    model_config = ConfigDict(frozen=True)
