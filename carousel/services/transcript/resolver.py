"""
Transcript resolver: tries transcript sources in priority order.
"""
import time
from typing import List, Sequence

from loguru import logger

from carousel.core.exceptions import AllSourcesExhausted
from carousel.models.enums import SourceStatus
from carousel.models.transcript import SourceOutcome, Transcript
from carousel.services.transcript.base import TranscriptSource


class TranscriptResolver:
    """
    Resolve a video id to a Transcript through an ordered fallback chain.

    Sources run one at a time, never in parallel: several of them are billed
    or slow, so a later source only runs once every earlier one has failed
    or been skipped. The resolver keeps no state between calls.
    """

    def __init__(self, sources: Sequence[TranscriptSource]):
        """
        Initialize the resolver.

        Args:
            sources: Transcript sources, highest priority first.
        """
        self.sources = list(sources)

    async def resolve(self, video_id: str) -> Transcript:
        """
        Produce a transcript from the first source that succeeds.

        Args:
            video_id: 11-character YouTube video id.

        Returns:
            Transcript: The normalized transcript, tagged with its source.

        Raises:
            AllSourcesExhausted: If every source failed or was skipped.
        """
        outcomes: List[SourceOutcome] = []
        start_time = time.perf_counter()

        for source in self.sources:
            transcript, outcome = await source.attempt(video_id)
            outcomes.append(outcome)

            if transcript is not None:
                duration = time.perf_counter() - start_time
                logger.info(
                    f"Transcript for {video_id} resolved by {outcome.source.value} "
                    f"({len(transcript.text)} chars, {duration:.2f}s, "
                    f"{len([o for o in outcomes if o.attempted])} source(s) attempted)"
                )
                return transcript

            if outcome.status == SourceStatus.FAILED:
                logger.warning(f"{outcome.source.value} failed for {video_id}, falling back")

        error = AllSourcesExhausted(
            video_id,
            outcomes,
            enable_hints={s.name: s.credential_env for s in self.sources if s.credential_env},
        )
        logger.error(error.detail)
        raise error
