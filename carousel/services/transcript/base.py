"""
Capability interface shared by every transcript source.

A source implements ``fetch`` and raises a ``TranscriptSourceError`` subclass
on failure. The resolver never calls ``fetch`` directly; it calls ``attempt``,
which reports a ``SourceOutcome`` for any result, including unexpected errors.
"""
from abc import ABC, abstractmethod
from typing import ClassVar, Iterable, Optional, Tuple

from loguru import logger

from carousel.core.constants import TranscriptConfig
from carousel.models.enums import SourceStatus, TranscriptSourceName
from carousel.models.transcript import (
    SourceOutcome,
    Transcript,
    TranscriptSegment,
    normalize_text,
    segments_end_ms,
)
from carousel.services.transcript.errors import (
    SourceEmptyOrTooShort,
    SourceNotConfigured,
    TranscriptSourceError,
)


class TranscriptSource(ABC):
    """
    One interchangeable backend able to produce a Transcript for a video id.

    Subclasses set ``name`` and, when they need a credential, override
    ``is_configured`` and set ``credential_env`` to the environment variable
    an operator must add to enable them.
    """

    name: ClassVar[TranscriptSourceName]
    credential_env: ClassVar[Optional[str]] = None

    def is_configured(self) -> bool:
        return True

    @abstractmethod
    async def fetch(self, video_id: str) -> Transcript:
        """
        Fetch and normalize a transcript.

        Raises:
            TranscriptSourceError: Classified failure of this source.
        """
        ...

    async def attempt(self, video_id: str) -> Tuple[Optional[Transcript], SourceOutcome]:
        """
        Run this source once and classify the result.

        Returns:
            The transcript (or None) together with this source's outcome.
        """
        if not self.is_configured():
            return None, self._skipped(f"{self.credential_env} not set")

        try:
            transcript = await self.fetch(video_id)
        except SourceNotConfigured as e:
            return None, self._skipped(str(e))
        except TranscriptSourceError as e:
            logger.warning(f"[{self.name.value}] {video_id}: {e}")
            return None, self._failed(str(e))
        except Exception as e:
            logger.exception(f"[{self.name.value}] {video_id}: unexpected error")
            return None, self._failed(f"unexpected error: {e}")

        if not transcript.is_acceptable:
            return None, self._failed(f"Transcript too short ({len(transcript.text)} chars)")

        return transcript, SourceOutcome(source=self.name, status=SourceStatus.SUCCEEDED)

    def build_transcript(
        self,
        pieces: Iterable[str],
        segments: Iterable[TranscriptSegment] = (),
        video_title: Optional[str] = None,
        duration_ms: Optional[int] = None,
    ) -> Transcript:
        """
        Normalize raw text pieces into a Transcript tagged with this source.

        Raises:
            SourceEmptyOrTooShort: If the normalized text is below the floor.
        """
        text = normalize_text(pieces)
        if len(text) < TranscriptConfig.MIN_TEXT_LENGTH:
            raise SourceEmptyOrTooShort(
                f"Transcript empty or too short ({len(text)} chars)"
            )

        segments = tuple(segments)
        return Transcript(
            text=text,
            segments=segments,
            video_title=video_title or TranscriptConfig.DEFAULT_VIDEO_TITLE,
            duration_ms=duration_ms or segments_end_ms(segments),
            source=self.name,
        )

    def _skipped(self, reason: str) -> SourceOutcome:
        logger.info(f"[{self.name.value}] skipped: {reason}")
        return SourceOutcome(source=self.name, status=SourceStatus.SKIPPED, reason=reason)

    def _failed(self, reason: str) -> SourceOutcome:
        return SourceOutcome(source=self.name, status=SourceStatus.FAILED, reason=reason)
