import pytest
from unittest.mock import MagicMock, patch

from tenacity import wait_none
from youtube_transcript_api import RequestBlocked, TranscriptsDisabled, VideoUnavailable
from youtube_transcript_api.proxies import GenericProxyConfig

from carousel.models.enums import SourceStatus, TranscriptSourceName
from carousel.services.proxy import ProxyService
from carousel.services.transcript.scraper import ScraperLibrarySource


def make_snippet(text, start, duration):
    snippet = MagicMock()
    snippet.text = text
    snippet.start = start
    snippet.duration = duration
    return snippet


def make_listed_transcript(is_generated, language_code, snippets):
    transcript = MagicMock()
    transcript.is_generated = is_generated
    transcript.language = language_code
    transcript.language_code = language_code
    transcript.fetch.return_value = snippets
    return transcript


MANUAL_SNIPPETS = [
    make_snippet("We're no strangers to love.", 0.0, 3.5),
    make_snippet("You know the rules and so do I.", 3.5, 2.25),
    make_snippet("A full commitment's what I'm thinking of.", 5.75, 4.0),
]


@pytest.mark.asyncio
async def test_prefers_manual_transcript():
    generated = make_listed_transcript(True, "en", [make_snippet("auto text", 0, 1)])
    manual = make_listed_transcript(False, "en", MANUAL_SNIPPETS)

    with patch("carousel.services.transcript.scraper.YouTubeTranscriptApi") as mock_api:
        mock_api.return_value.list.return_value = [generated, manual]

        transcript = await ScraperLibrarySource().fetch("dQw4w9WgXcQ")

    assert transcript.source == TranscriptSourceName.SCRAPER_LIBRARY
    assert transcript.text.startswith("We're no strangers to love. You know the rules")
    assert [s.offset_ms for s in transcript.segments] == [0, 3500, 5750]
    assert [s.duration_ms for s in transcript.segments] == [3500, 2250, 4000]
    assert transcript.duration_ms == 9750
    generated.fetch.assert_not_called()


@pytest.mark.asyncio
async def test_disabled_captions_fail_without_retry():
    with patch("carousel.services.transcript.scraper.YouTubeTranscriptApi") as mock_api:
        mock_api.return_value.list.side_effect = TranscriptsDisabled("dQw4w9WgXcQ")

        transcript, outcome = await ScraperLibrarySource().attempt("dQw4w9WgXcQ")

    assert transcript is None
    assert outcome.status == SourceStatus.FAILED
    assert "TranscriptsDisabled" in outcome.reason
    assert mock_api.return_value.list.call_count == 1


@pytest.mark.asyncio
async def test_uses_rotating_proxy_when_configured():
    proxy_service = ProxyService(host="gw.dataimpulse.com", port=823, login="user", password="secret")
    manual = make_listed_transcript(False, "en", MANUAL_SNIPPETS)

    with patch("carousel.services.transcript.scraper.YouTubeTranscriptApi") as mock_api:
        mock_api.return_value.list.return_value = [manual]

        await ScraperLibrarySource(proxy_service=proxy_service).fetch("dQw4w9WgXcQ")

    proxy_config = mock_api.call_args.kwargs["proxy_config"]
    assert isinstance(proxy_config, GenericProxyConfig)


@pytest.mark.asyncio
async def test_direct_connection_without_proxy():
    manual = make_listed_transcript(False, "en", MANUAL_SNIPPETS)

    with patch("carousel.services.transcript.scraper.YouTubeTranscriptApi") as mock_api:
        mock_api.return_value.list.return_value = [manual]

        await ScraperLibrarySource(proxy_service=ProxyService()).fetch("dQw4w9WgXcQ")

    assert mock_api.call_args.kwargs["proxy_config"] is None


@pytest.fixture
def no_retry_wait():
    with patch.object(ScraperLibrarySource._fetch_with_retry.retry, "wait", wait_none()):
        yield


@pytest.mark.asyncio
async def test_unavailable_video_fails_without_retry(no_retry_wait):
    with patch("carousel.services.transcript.scraper.YouTubeTranscriptApi") as mock_api:
        mock_api.return_value.list.side_effect = VideoUnavailable("dQw4w9WgXcQ")

        transcript, outcome = await ScraperLibrarySource().attempt("dQw4w9WgXcQ")

    assert transcript is None
    assert outcome.status == SourceStatus.FAILED
    assert outcome.reason == "No transcript available: VideoUnavailable"
    assert mock_api.return_value.list.call_count == 1


@pytest.mark.asyncio
async def test_blocked_request_is_retried(no_retry_wait):
    manual = make_listed_transcript(False, "en", MANUAL_SNIPPETS)

    with patch("carousel.services.transcript.scraper.YouTubeTranscriptApi") as mock_api:
        mock_api.return_value.list.side_effect = [
            RequestBlocked("dQw4w9WgXcQ"),
            ConnectionError("connection reset"),
            [manual],
        ]

        transcript, outcome = await ScraperLibrarySource().attempt("dQw4w9WgXcQ")

    assert outcome.status == SourceStatus.SUCCEEDED
    assert transcript.text.startswith("We're no strangers to love.")
    assert mock_api.return_value.list.call_count == 3


@pytest.mark.asyncio
async def test_gives_up_after_three_attempts(no_retry_wait):
    with patch("carousel.services.transcript.scraper.YouTubeTranscriptApi") as mock_api:
        mock_api.return_value.list.side_effect = RequestBlocked("dQw4w9WgXcQ")

        _, outcome = await ScraperLibrarySource().attempt("dQw4w9WgXcQ")

    assert outcome.status == SourceStatus.FAILED
    assert outcome.reason.startswith("RequestBlocked")
    assert mock_api.return_value.list.call_count == 3


@pytest.mark.asyncio
async def test_rejects_text_below_floor_after_annotations_are_removed():
    snippets = [make_snippet("[Music]", i, 1) for i in range(20)] + [make_snippet("hi there", 20, 1)]
    manual = make_listed_transcript(False, "en", snippets)

    with patch("carousel.services.transcript.scraper.YouTubeTranscriptApi") as mock_api:
        mock_api.return_value.list.return_value = [manual]

        transcript, outcome = await ScraperLibrarySource().attempt("dQw4w9WgXcQ")

    assert transcript is None
    assert outcome.status == SourceStatus.FAILED
    assert outcome.reason == "Transcript empty or too short (8 chars)"
