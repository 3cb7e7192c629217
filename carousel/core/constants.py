"""
Application-wide constants and configuration limits.

Grouped into static classes for namespace management and discoverability.
"""

class TranscriptConfig:
    """Configuration shared by all transcript sources."""
    MIN_TEXT_LENGTH = 50  # Characters; anything shorter is a failed fetch
    DEFAULT_VIDEO_TITLE = "Unknown"
    WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


class InnerTubeConfig:
    """Configuration for the native InnerTube captions client."""
    BASE_URL = "https://www.youtube.com"
    CLIENT_NAME = "WEB"
    LANGUAGE = "en"
    LOCATION = "US"
    USER_AGENT = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )


class ApifyConfig:
    """Configuration for the Apify remote scraping service."""
    MAX_RETRIES = 2  # Passed to the actor, not retried locally
    SYNTHETIC_SEGMENT_MS = 3000  # Per-item duration for plain caption strings
    TERMINAL_FAILURES = frozenset({"FAILED", "ABORTED", "TIMED-OUT"})
    SUCCEEDED = "SUCCEEDED"


class AudioConfig:
    """Configuration for the audio download + speech-to-text fallback."""
    AUDIO_FORMAT = "mp3"
    AUDIO_QUALITY = "192"
    CANDIDATE_EXTENSIONS = ("mp3", "m4a", "webm", "opus", "ogg")
    FILE_PREFIX = "youtube_audio_"


class ConceptConfig:
    """Configuration for key-concept extraction."""
    MAX_TRANSCRIPT_CHARS = 8_000  # Prefix sent to the LLM
    DEFAULT_SLIDE_COUNT = 7
    MIN_SLIDE_COUNT = 3
    MAX_SLIDE_COUNT = 10
    MIN_SENTENCE_LENGTH = 10
    MIN_SENTENCES = 3
    MAX_CONTENT_CHARS = 120  # Heuristic slide body limit
    LLM_TEMPERATURE = 0.4


class CopyConfig:
    """Configuration for Instagram copy generation."""
    CAPTION_POINTS = 5
    MAX_HASHTAGS = 15
    HASHTAGS_PER_TOPIC = 2


class RateLimitConfig:
    """Rate limiting thresholds (requests per minute)."""
    TRANSCRIPT = "10/minute"
    PROCESS = "10/minute"
    SLIDES = "30/minute"
