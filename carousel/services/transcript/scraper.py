"""
Scraper-library source using youtube-transcript-api.
"""
import asyncio
from typing import List, Optional, Tuple

from loguru import logger
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
from youtube_transcript_api import (
    AgeRestricted,
    CouldNotRetrieveTranscript,
    InvalidVideoId,
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    VideoUnplayable,
    YouTubeTranscriptApi,
)
from youtube_transcript_api.proxies import GenericProxyConfig

from carousel.models.enums import TranscriptSourceName
from carousel.models.transcript import Transcript, TranscriptSegment
from carousel.services.proxy import ProxyService
from carousel.services.transcript.base import TranscriptSource
from carousel.services.transcript.errors import NoCaptionsAvailable, SourceTransportError

# Conditions that will not change on a retry.
PERMANENT_ERRORS = (
    TranscriptsDisabled,
    NoTranscriptFound,
    VideoUnavailable,
    VideoUnplayable,
    InvalidVideoId,
    AgeRestricted,
)


class ScraperLibrarySource(TranscriptSource):
    """
    Captions through youtube-transcript-api.

    This path tolerates hosted environments where the native client is
    blocked, especially when a rotating proxy is configured: every retry
    gets a fresh proxy session.
    """

    name = TranscriptSourceName.SCRAPER_LIBRARY

    def __init__(self, proxy_service: Optional[ProxyService] = None):
        """
        Initialize the source.

        Args:
            proxy_service: Optional rotating proxy for requests to YouTube.
        """
        self.proxy_service = proxy_service

    def _fetch_sync(self, video_id: str) -> Tuple[List[TranscriptSegment], str]:
        """
        Blocking fetch, run in a worker thread.

        Prioritizes Manual subtitles (any lang) > Automatic captions (any lang).
        """
        proxy_conf = None
        proxies = self.proxy_service.get_proxies() if self.proxy_service else None
        if proxies:
            proxy_conf = GenericProxyConfig(http_url=proxies.http, https_url=proxies.https)

        try:
            transcript_list = list(YouTubeTranscriptApi(proxy_config=proxy_conf).list(video_id))

            chosen = next((t for t in transcript_list if not t.is_generated), None)
            if chosen is None:
                chosen = next((t for t in transcript_list if t.is_generated), None)
            if chosen is None:
                raise NoCaptionsAvailable("No transcript available")

            logger.info(
                f"Video {video_id}: Using {'Automatic' if chosen.is_generated else 'Manual'} "
                f"transcript in '{chosen.language}'"
            )
            fetched = chosen.fetch()
        except PERMANENT_ERRORS as e:
            raise NoCaptionsAvailable(f"No transcript available: {type(e).__name__}") from e
        except CouldNotRetrieveTranscript as e:
            # RequestBlocked, IpBlocked and YouTubeRequestFailed
            raise SourceTransportError(f"{type(e).__name__}: {_first_line(e)}") from e
        except OSError as e:
            # requests connection errors
            raise SourceTransportError(f"Connection error: {e}") from e

        segments = [
            TranscriptSegment(
                text=snippet.text or "",
                offset_ms=int(round((snippet.start or 0) * 1000)),
                duration_ms=int(round((snippet.duration or 0) * 1000)),
            )
            for snippet in fetched
        ]
        return segments, chosen.language_code

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(SourceTransportError),
        reraise=True,
    )
    async def _fetch_with_retry(self, video_id: str) -> Tuple[List[TranscriptSegment], str]:
        try:
            return await asyncio.to_thread(self._fetch_sync, video_id)
        except SourceTransportError as e:
            logger.warning(f"Error fetching transcript for {video_id} (retrying): {e}")
            raise

    async def fetch(self, video_id: str) -> Transcript:
        segments, language = await self._fetch_with_retry(video_id)

        transcript = self.build_transcript((s.text for s in segments), segments)
        logger.info(
            f"Successfully fetched transcript for {video_id} "
            f"({len(transcript.text)} chars, language '{language}')"
        )
        return transcript


def _first_line(error: Exception) -> str:
    text = str(error).strip()
    return text.splitlines()[0] if text else ""
