"""
YouTube URL helpers: video id extraction and derived URLs.
"""
import re
from typing import Optional

from carousel.core.constants import TranscriptConfig
from carousel.core.exceptions import InvalidIdentifier

VIDEO_ID_LENGTH = 11

_URL_PATTERN = re.compile(
    r"(?:youtube\.com/watch\?(?:[^#\s]*&)?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/)"
    r"([a-zA-Z0-9_-]{11})(?![a-zA-Z0-9_-])"
)
_BARE_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{11}$")


def extract_video_id(raw: Optional[str]) -> Optional[str]:
    """
    Extract the 11-character video id from a YouTube URL or bare id.

    Recognized shapes: ``watch?v=<id>``, ``youtu.be/<id>``, ``embed/<id>``,
    ``v/<id>`` and a bare id. Returns None when nothing matches.

    Examples:
        >>> extract_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
        >>> extract_video_id("not a url") is None
        True
    """
    if not raw:
        return None

    candidate = raw.strip()
    match = _URL_PATTERN.search(candidate)
    if match:
        return match.group(1)

    if _BARE_ID_PATTERN.match(candidate):
        return candidate
    return None


def require_video_id(raw: Optional[str]) -> str:
    """
    Like ``extract_video_id`` but raises for unrecognized input.

    Raises:
        InvalidIdentifier: If ``raw`` matches no recognized shape.
    """
    video_id = extract_video_id(raw)
    if video_id is None:
        raise InvalidIdentifier(raw or "")
    return video_id


def watch_url(video_id: str) -> str:
    return TranscriptConfig.WATCH_URL.format(video_id=video_id)


def thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
