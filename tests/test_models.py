"""
Unit tests for Pydantic models.
"""
import pytest

from carousel.models import (
    ProcessRequest,
    SourceOutcome,
    SourceStatus,
    Transcript,
    TranscriptSegment,
    TranscriptSourceName,
)
from carousel.models.proxy import ProxyConfig
from carousel.models.transcript import normalize_text, segments_end_ms
from carousel.services.proxy import ProxyService


def test_normalize_text_removes_annotations_and_whitespace():
    pieces = ["[Music]", "  Hello\n", "world  [Applause] ", "", "again"]
    assert normalize_text(pieces) == "Hello world again"


def test_transcript_acceptance_floor():
    """Exactly 50 characters is accepted, 49 is not."""
    assert Transcript(text="a" * 50, source=TranscriptSourceName.NATIVE_CAPTIONS).is_acceptable
    assert not Transcript(text="a" * 49, source=TranscriptSourceName.NATIVE_CAPTIONS).is_acceptable


def test_transcript_is_immutable():
    transcript = Transcript(text="a" * 60, source=TranscriptSourceName.SCRAPER_LIBRARY)
    with pytest.raises(Exception):  # ValidationError for frozen model
        transcript.text = "Changed"


def test_transcript_defaults():
    transcript = Transcript(text="a" * 60, source=TranscriptSourceName.SCRAPER_LIBRARY)
    assert transcript.video_title == "Unknown"
    assert transcript.segments == ()
    assert transcript.duration_ms == 0


def test_segments_end_ms():
    segments = [
        TranscriptSegment(text="a", offset_ms=0, duration_ms=1500),
        TranscriptSegment(text="b", offset_ms=1500, duration_ms=2000),
    ]
    assert segments_end_ms(segments) == 3500
    assert segments_end_ms([]) == 0


def test_source_outcome_attempted():
    skipped = SourceOutcome(source=TranscriptSourceName.AUDIO_TRANSCRIPTION, status=SourceStatus.SKIPPED)
    failed = SourceOutcome(source=TranscriptSourceName.NATIVE_CAPTIONS, status=SourceStatus.FAILED)
    assert not skipped.attempted
    assert failed.attempted


def test_process_request_manual_transcript_threshold():
    assert ProcessRequest(transcript="x" * 50).manual_transcript is None
    assert ProcessRequest(transcript="  " + "x" * 51 + "  ").manual_transcript == "x" * 51


def test_proxy_config_url_prefers_https():
    assert ProxyConfig(http="http://a", https="http://b").url == "http://b"
    assert ProxyConfig().url is None


def test_proxy_service_rotates_sessions():
    service = ProxyService(host="gw.dataimpulse.com", port=823, login="user", password="secret")

    first = service.get_proxies()
    second = service.get_proxies()

    assert first.http.startswith("http://user__session-")
    assert first.http.endswith(":secret@gw.dataimpulse.com:823")
    assert first.session_id != second.session_id
    assert ProxyService(host="gw.dataimpulse.com").get_proxies() is None
