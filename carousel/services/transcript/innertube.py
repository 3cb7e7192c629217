"""
Native captions source backed by YouTube's internal InnerTube API.
"""
import asyncio
import re
from typing import List, Optional, Tuple

import httpx
from loguru import logger
from pydantic import ValidationError

from carousel.core.constants import InnerTubeConfig
from carousel.models.enums import TranscriptSourceName
from carousel.models.transcript import Transcript, TranscriptSegment
from carousel.models.youtube import CaptionTrack, CaptionTrackContent, PlayerResponse
from carousel.services.transcript.base import TranscriptSource
from carousel.services.transcript.errors import (
    EmptyTranscript,
    NoCaptionsAvailable,
    ServiceError,
    SourceTransportError,
)

_API_KEY_PATTERNS = (
    re.compile(r'"INNERTUBE_API_KEY"\s*:\s*"([^"]+)"'),
    re.compile(r"ytcfg\.set\(\s*['\"]INNERTUBE_API_KEY['\"]\s*,\s*['\"]([^'\"]+)['\"]\s*\)"),
)
_CLIENT_VERSION_PATTERNS = (
    re.compile(r'"INNERTUBE_CONTEXT_CLIENT_VERSION"\s*:\s*"([^"]+)"'),
    re.compile(r'"clientVersion"\s*:\s*"([^"]+)"'),
)


def extract_innertube_config(html: str) -> Optional[Tuple[str, str]]:
    """
    Find the InnerTube API key and web client version in a YouTube page.

    Returns:
        (api_key, client_version), or None if either is missing.
    """
    api_key = _first_match(_API_KEY_PATTERNS, html)
    client_version = _first_match(_CLIENT_VERSION_PATTERNS, html)
    if api_key and client_version:
        return api_key, client_version
    return None


def _first_match(patterns, html: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(html)
        if match:
            return match.group(1)
    return None


def choose_track(tracks: List[CaptionTrack]) -> CaptionTrack:
    """Manual captions (any language) win over auto-generated ones."""
    for track in tracks:
        if not track.is_generated:
            return track
    return tracks[0]


class InnerTubeClient:
    """
    Thin InnerTube client bound to one API key / client version pair.

    Construct it with ``create``, which performs the handshake.
    """

    def __init__(self, http: httpx.AsyncClient, api_key: str, client_version: str):
        self.http = http
        self.api_key = api_key
        self.client_version = client_version

    @classmethod
    async def create(cls, http: httpx.AsyncClient) -> "InnerTubeClient":
        """
        Retrieve the web client configuration from the YouTube home page.

        Raises:
            SourceTransportError: If the page cannot be fetched or parsed.
        """
        try:
            response = await http.get(
                f"{InnerTubeConfig.BASE_URL}/",
                params={"hl": InnerTubeConfig.LANGUAGE, "gl": InnerTubeConfig.LOCATION},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise SourceTransportError(f"InnerTube handshake failed: {e}") from e

        config = extract_innertube_config(response.text)
        if config is None:
            raise SourceTransportError("InnerTube handshake failed: client config not found")

        api_key, client_version = config
        logger.info(f"InnerTube client initialized (client version {client_version})")
        return cls(http, api_key, client_version)

    async def get_player(self, video_id: str) -> PlayerResponse:
        response = await self.http.post(
            f"{InnerTubeConfig.BASE_URL}/youtubei/v1/player",
            params={"key": self.api_key, "prettyPrint": "false"},
            json={
                "context": {
                    "client": {
                        "clientName": InnerTubeConfig.CLIENT_NAME,
                        "clientVersion": self.client_version,
                        "hl": InnerTubeConfig.LANGUAGE,
                        "gl": InnerTubeConfig.LOCATION,
                    }
                },
                "videoId": video_id,
            },
        )
        response.raise_for_status()
        return PlayerResponse.model_validate(response.json())

    async def get_caption_track(self, track: CaptionTrack) -> CaptionTrackContent:
        url = httpx.URL(track.base_url).copy_merge_params({"fmt": "json3"})
        response = await self.http.get(url)
        response.raise_for_status()
        if not response.content:
            return CaptionTrackContent()
        return CaptionTrackContent.model_validate(response.json())


class NativeCaptionsSource(TranscriptSource):
    """
    Captions read straight from the InnerTube player API.

    The InnerTube client is created on first use and then shared by every
    call on this instance. Concurrent first calls wait on a lock so only one
    handshake runs; a failed handshake is not cached.
    """

    name = TranscriptSourceName.NATIVE_CAPTIONS

    def __init__(self, timeout: float = 20.0, http: Optional[httpx.AsyncClient] = None):
        self._http = http or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={
                "User-Agent": InnerTubeConfig.USER_AGENT,
                "Accept-Language": "en-US,en;q=0.9",
            },
        )
        self._client: Optional[InnerTubeClient] = None
        self._lock = asyncio.Lock()

    async def get_client(self) -> InnerTubeClient:
        if self._client is not None:
            return self._client
        async with self._lock:
            if self._client is None:
                self._client = await InnerTubeClient.create(self._http)
        return self._client

    async def aclose(self) -> None:
        await self._http.aclose()

    async def fetch(self, video_id: str) -> Transcript:
        client = await self.get_client()

        try:
            player = await client.get_player(video_id)

            status = player.playability_status
            if status.status != "OK":
                raise NoCaptionsAvailable(
                    f"Video not playable: {status.reason or status.status}"
                )

            tracks = player.caption_tracks
            if not tracks:
                raise NoCaptionsAvailable("No transcript available")

            track = choose_track(tracks)
            logger.info(
                f"Video {video_id}: Using {'Automatic' if track.is_generated else 'Manual'} "
                f"captions in '{track.language_code}'"
            )
            content = await client.get_caption_track(track)
        except httpx.HTTPStatusError as e:
            raise ServiceError("InnerTube", e.response.status_code) from e
        except httpx.HTTPError as e:
            raise SourceTransportError(f"InnerTube request failed: {e}") from e
        except ValidationError as e:
            raise SourceTransportError(f"Unexpected InnerTube response: {e}") from e

        segments = [
            TranscriptSegment(text=event.text, offset_ms=event.start_ms, duration_ms=event.duration_ms)
            for event in content.events
            if event.text
        ]
        if not segments:
            raise EmptyTranscript("Transcript is empty")

        details = player.video_details
        transcript = self.build_transcript(
            (s.text for s in segments),
            segments,
            video_title=details.title if details else None,
            duration_ms=(details.length_seconds or 0) * 1000 if details else 0,
        )
        logger.info(f"Transcript retrieved for video {video_id} ({len(transcript.text)} chars)")
        return transcript
