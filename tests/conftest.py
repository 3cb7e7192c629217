"""
Shared pytest fixtures and configuration.
"""
from typing import Iterable, List, Optional

import pytest
from unittest.mock import AsyncMock

from carousel.main import app
from carousel.api.dependencies import (
    get_carousel_service,
    get_concept_llm_provider,
    get_transcript_resolver,
)
from carousel.core.limiter import limiter
from carousel.models.enums import TranscriptSourceName
from carousel.models.transcript import Transcript, TranscriptSegment
from carousel.services.transcript.base import TranscriptSource


class FakeSource(TranscriptSource):
    """
    Scripted transcript source that counts its fetch calls.

    Exactly one of ``text`` or ``error`` is used; ``configured=False``
    makes the source report itself as not configured.
    """

    def __init__(
        self,
        name: TranscriptSourceName,
        text: Optional[str] = None,
        error: Optional[Exception] = None,
        configured: bool = True,
        credential_env: Optional[str] = None,
        segment_count: int = 1,
        title: Optional[str] = None,
    ):
        self.name = name
        self.credential_env = credential_env
        self.text = text
        self.error = error
        self.configured = configured
        self.segment_count = segment_count
        self.title = title
        self.calls = 0

    def is_configured(self) -> bool:
        return self.configured

    async def fetch(self, video_id: str) -> Transcript:
        self.calls += 1
        if self.error is not None:
            raise self.error

        pieces = _split(self.text or "", self.segment_count)
        segments = [
            TranscriptSegment(text=piece, offset_ms=i * 1000, duration_ms=1000)
            for i, piece in enumerate(pieces)
        ]
        # Bypasses the length floor so the resolver's own check is exercised
        return Transcript(
            text=self.text or "",
            segments=tuple(segments),
            video_title=self.title or "Unknown",
            duration_ms=len(segments) * 1000,
            source=self.name,
        )


def _split(text: str, parts: int) -> List[str]:
    words = text.split()
    if not words:
        return []
    size = max(1, -(-len(words) // parts))
    return [" ".join(words[i:i + size]) for i in range(0, len(words), size)]


@pytest.fixture
def make_sources():
    """Factory: one FakeSource per keyword dict, named after the real sources in priority order."""
    def build(*configs: dict) -> List[FakeSource]:
        names: Iterable[TranscriptSourceName] = list(TranscriptSourceName)
        return [FakeSource(name=name, **options) for name, options in zip(names, configs)]

    return build


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with empty rate-limit counters."""
    limiter.reset()
    yield


@pytest.fixture
def mock_carousel_service():
    """Create a mock CarouselService."""
    return AsyncMock()


@pytest.fixture
def override_dependencies(mock_carousel_service):
    """Override FastAPI dependencies for testing."""
    def override_get_carousel_service():
        return mock_carousel_service

    app.dependency_overrides[get_carousel_service] = override_get_carousel_service
    app.dependency_overrides[get_concept_llm_provider] = lambda: None

    yield

    # Clean up
    app.dependency_overrides.clear()


@pytest.fixture
def override_resolver():
    """
    Replace the transcript resolver while keeping the real carousel wiring.

    Yields a setter taking the resolver to install.
    """
    def install(resolver):
        app.dependency_overrides[get_transcript_resolver] = lambda: resolver
        app.dependency_overrides[get_concept_llm_provider] = lambda: None

    yield install

    app.dependency_overrides.clear()
