"""
Result shapes returned by the Apify transcript scraper.

Different actor versions emit different dataset items. Each known layout is a
variant of a tagged union, selected by ``classify_dataset_item`` from the one
field that identifies it.
"""
from typing import Any, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from carousel.core.constants import ApifyConfig
from carousel.models.transcript import TranscriptSegment


class ApifyTranscriptItem(BaseModel):
    text: str = ""
    start: float = 0.0  # Seconds
    duration: float = 0.0  # Seconds

    model_config = ConfigDict(extra="ignore")

    @field_validator("text", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("start", "duration", mode="before")
    @classmethod
    def none_to_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v


class TranscriptItemsShape(BaseModel):
    """``{"transcript": [{"text", "start", "duration"}, ...]}``"""

    kind: Literal["transcript_items"] = "transcript_items"
    items: List[ApifyTranscriptItem]

    model_config = ConfigDict(frozen=True)

    def to_segments(self) -> Tuple[TranscriptSegment, ...]:
        return tuple(
            TranscriptSegment(
                text=item.text,
                offset_ms=int(round(item.start * 1000)),
                duration_ms=int(round(item.duration * 1000)),
            )
            for item in self.items
        )


class CaptionsArrayShape(BaseModel):
    """``{"captions": ["line", ...]}``. Timing is synthesized."""

    kind: Literal["captions_array"] = "captions_array"
    captions: List[str]

    model_config = ConfigDict(frozen=True)

    def to_segments(self) -> Tuple[TranscriptSegment, ...]:
        step = ApifyConfig.SYNTHETIC_SEGMENT_MS
        return tuple(
            TranscriptSegment(text=caption, offset_ms=index * step, duration_ms=step)
            for index, caption in enumerate(self.captions)
        )


class TranscriptTextShape(BaseModel):
    """``{"transcriptText": "..."}``. Plain text only."""

    kind: Literal["transcript_text"] = "transcript_text"
    text: str

    model_config = ConfigDict(frozen=True)

    def to_segments(self) -> Tuple[TranscriptSegment, ...]:
        return ()


class UnrecognizedShape(BaseModel):
    kind: Literal["unrecognized"] = "unrecognized"
    keys: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def to_segments(self) -> Tuple[TranscriptSegment, ...]:
        return ()


ApifyResultShape = Union[
    TranscriptItemsShape, CaptionsArrayShape, TranscriptTextShape, UnrecognizedShape
]


class ApifyItemMeta(BaseModel):
    """Video metadata that accompanies any result shape."""

    title: Optional[str] = None
    duration: Optional[float] = None  # Seconds

    model_config = ConfigDict(extra="ignore")

    @field_validator("duration", mode="before")
    @classmethod
    def ignore_non_numeric(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return v
        try:
            return float(v)
        except (TypeError, ValueError):
            return None


def classify_dataset_item(item: Any) -> ApifyResultShape:
    """Pick the result shape of one dataset item by its discriminating field."""
    if not isinstance(item, dict):
        return UnrecognizedShape()

    try:
        if isinstance(item.get("transcript"), list):
            return TranscriptItemsShape(items=item["transcript"])
        if isinstance(item.get("captions"), list):
            return CaptionsArrayShape(captions=item["captions"])
        if isinstance(item.get("transcriptText"), str):
            return TranscriptTextShape(text=item["transcriptText"])
    except ValidationError:
        pass

    return UnrecognizedShape(keys=sorted(item.keys()))
