"""
Audio download + speech-to-text source.

The slowest and most expensive path (full audio download, then a hosted
transcription job), so it is tried last.
"""
import asyncio
import tempfile
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict
from yt_dlp import YoutubeDL
from yt_dlp.utils import YoutubeDLError

from carousel.core.constants import AudioConfig
from carousel.core.providers.speech_provider import (
    SpeechToTextConnectionError,
    SpeechToTextError,
    SpeechToTextProvider,
)
from carousel.models.enums import TranscriptSourceName
from carousel.models.transcript import Transcript, TranscriptSegment
from carousel.models.youtube import YtDlpInfo
from carousel.services.proxy import ProxyService
from carousel.services.transcript.base import TranscriptSource
from carousel.services.youtube import watch_url
from carousel.services.transcript.errors import (
    DownloadFailed,
    SourceNotConfigured,
    SourceTransportError,
    TranscriptionFailed,
)


class DownloadedAudio(BaseModel):
    path: Path
    title: Optional[str] = None
    duration: Optional[float] = None  # Seconds

    model_config = ConfigDict(frozen=True)


def locate_audio_file(directory: Path, stem: str) -> Optional[Path]:
    """
    Find the file yt-dlp produced for ``stem``.

    The final extension depends on the formats available and on whether the
    audio post-processor ran, so known audio extensions are probed in order
    before falling back to any finished file with the same stem.
    """
    for ext in AudioConfig.CANDIDATE_EXTENSIONS:
        candidate = directory / f"{stem}.{ext}"
        if candidate.exists():
            return candidate

    for candidate in sorted(directory.glob(f"{stem}.*")):
        if candidate.suffix not in (".part", ".ytdl"):
            return candidate
    return None


class AudioTranscriptionSource(TranscriptSource):
    """
    Download the audio track with yt-dlp and transcribe it remotely.

    Every download goes into its own temporary directory, so concurrent
    requests for the same video never share a file, and the directory is
    removed on every exit path.
    """

    name = TranscriptSourceName.AUDIO_TRANSCRIPTION
    credential_env = "GROQ_API_KEY"

    def __init__(
        self,
        speech_provider: Optional[SpeechToTextProvider],
        temp_dir: Optional[str] = None,
        proxy_service: Optional[ProxyService] = None,
    ):
        """
        Initialize the source.

        Args:
            speech_provider: Hosted speech-to-text provider; None disables the source.
            temp_dir: Parent directory for downloads (system temp if None).
            proxy_service: Optional rotating proxy for the download.
        """
        self.speech_provider = speech_provider
        self.temp_dir = temp_dir
        self.proxy_service = proxy_service

    def is_configured(self) -> bool:
        return self.speech_provider is not None

    def _download_sync(self, video_id: str, directory: Path) -> DownloadedAudio:
        """Blocking yt-dlp download, run in a worker thread."""
        stem = f"{AudioConfig.FILE_PREFIX}{video_id}_{uuid.uuid4().hex[:8]}"
        ydl_opts = {
            "format": "bestaudio/best",
            "outtmpl": str(directory / f"{stem}.%(ext)s"),
            "postprocessors": [
                {
                    "key": "FFmpegExtractAudio",
                    "preferredcodec": AudioConfig.AUDIO_FORMAT,
                    "preferredquality": AudioConfig.AUDIO_QUALITY,
                }
            ],
            "noplaylist": True,
            "nocheckcertificate": True,
            "quiet": True,
            "no_warnings": True,
        }
        proxies = self.proxy_service.get_proxies() if self.proxy_service else None
        if proxies:
            ydl_opts["proxy"] = proxies.url

        url = watch_url(video_id)
        try:
            with YoutubeDL(ydl_opts) as ydl:
                info_dict = ydl.extract_info(url, download=True)
        except YoutubeDLError as e:
            raise DownloadFailed(f"Failed to download audio: {e}") from e

        info = YtDlpInfo(**(info_dict or {}))
        path = locate_audio_file(directory, stem)
        if path is None:
            raise DownloadFailed("Audio file was not downloaded")

        return DownloadedAudio(path=path, title=info.title, duration=info.duration)

    @asynccontextmanager
    async def downloaded_audio(self, video_id: str) -> AsyncIterator[DownloadedAudio]:
        """Download audio into a private temp directory that is always removed."""
        workdir = tempfile.TemporaryDirectory(
            prefix=f"{AudioConfig.FILE_PREFIX}{video_id}_",
            dir=self.temp_dir,
            ignore_cleanup_errors=True,
        )
        try:
            logger.info(f"Downloading audio for video {video_id} using yt-dlp...")
            yield await asyncio.to_thread(self._download_sync, video_id, Path(workdir.name))
        finally:
            workdir.cleanup()
            logger.debug(f"Cleaned up temporary audio directory for {video_id}")

    async def fetch(self, video_id: str) -> Transcript:
        if self.speech_provider is None:
            raise SourceNotConfigured(f"{self.credential_env} not configured")

        async with self.downloaded_audio(video_id) as audio:
            logger.info(f"Audio downloaded: {audio.path.name}")
            try:
                result = await self.speech_provider.transcribe(audio.path)
            except SpeechToTextConnectionError as e:
                raise SourceTransportError(str(e)) from e
            except SpeechToTextError as e:
                raise TranscriptionFailed(str(e)) from e

        segments = [
            TranscriptSegment(
                text=segment.text.strip(),
                offset_ms=int(round(segment.start * 1000)),
                duration_ms=int(round(max(segment.end - segment.start, 0) * 1000)),
            )
            for segment in result.segments
        ]
        duration = audio.duration or result.duration
        transcript = self.build_transcript(
            [result.text],
            segments,
            video_title=audio.title,
            duration_ms=int(duration * 1000) if duration else None,
        )
        logger.info(f"Audio transcription completed ({len(transcript.text)} chars)")
        return transcript
