from .youtube import YtDlpInfo, PlayerResponse, CaptionTrack, CaptionTrackContent
from .transcript import Transcript, TranscriptSegment, SourceOutcome, normalize_text
from .apify import (
    ApifyResultShape,
    TranscriptItemsShape,
    CaptionsArrayShape,
    TranscriptTextShape,
    UnrecognizedShape,
    classify_dataset_item,
)
from .carousel import Concept, InstagramCopy, SlidePrompt, CarouselPackage
from .api import (
    TranscriptRequest,
    TranscriptResponse,
    ProcessRequest,
    ProcessTextRequest,
    CarouselResponse,
    SlidesRequest,
    SlidesResponse,
    ThumbnailResponse,
)
from .proxy import ProxyConfig
from .enums import TranscriptSourceName, SourceStatus, ApifyMode, SlideType, LLMRole, LLMProviderType
