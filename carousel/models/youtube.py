from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

# --- Internal Parsing Models (yt-dlp) ---

class YtDlpInfo(BaseModel):
    id: Optional[str] = None
    title: Optional[str] = None
    duration: Optional[float] = None  # Seconds

    model_config = ConfigDict(extra='ignore')

# --- Internal Parsing Models (InnerTube player) ---

class PlayabilityStatus(BaseModel):
    status: str = "UNKNOWN"
    reason: Optional[str] = None

    model_config = ConfigDict(extra='ignore')

class VideoDetails(BaseModel):
    video_id: Optional[str] = Field(default=None, alias="videoId")
    title: Optional[str] = None
    length_seconds: Optional[int] = Field(default=None, alias="lengthSeconds")

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

class CaptionTrack(BaseModel):
    base_url: str = Field(alias="baseUrl")
    language_code: Optional[str] = Field(default=None, alias="languageCode")
    kind: Optional[str] = None

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    @property
    def is_generated(self) -> bool:
        return self.kind == "asr"

class CaptionTracklist(BaseModel):
    caption_tracks: List[CaptionTrack] = Field(default_factory=list, alias="captionTracks")

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

class PlayerCaptions(BaseModel):
    tracklist: Optional[CaptionTracklist] = Field(
        default=None, alias="playerCaptionsTracklistRenderer"
    )

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

class PlayerResponse(BaseModel):
    playability_status: PlayabilityStatus = Field(
        default_factory=PlayabilityStatus, alias="playabilityStatus"
    )
    video_details: Optional[VideoDetails] = Field(default=None, alias="videoDetails")
    captions: Optional[PlayerCaptions] = None

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    @property
    def caption_tracks(self) -> List[CaptionTrack]:
        if self.captions and self.captions.tracklist:
            return self.captions.tracklist.caption_tracks
        return []

# --- Internal Parsing Models (json3 caption track) ---

class CaptionSeg(BaseModel):
    utf8: str = ""

    model_config = ConfigDict(extra='ignore')

class CaptionEvent(BaseModel):
    start_ms: int = Field(default=0, alias="tStartMs")
    duration_ms: int = Field(default=0, alias="dDurationMs")
    segs: List[CaptionSeg] = Field(default_factory=list)

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    @property
    def text(self) -> str:
        return "".join(seg.utf8 for seg in self.segs).strip()

class CaptionTrackContent(BaseModel):
    events: List[CaptionEvent] = Field(default_factory=list)

    model_config = ConfigDict(extra='ignore')
