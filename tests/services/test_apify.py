import httpx
import pytest
import respx
from unittest.mock import patch

from carousel.models.apify import (
    CaptionsArrayShape,
    TranscriptItemsShape,
    TranscriptTextShape,
    UnrecognizedShape,
    classify_dataset_item,
)
from carousel.models.enums import ApifyMode, SourceStatus, TranscriptSourceName
from carousel.services.transcript.apify import RemoteScraperSource

BASE_URL = "https://api.apify.com"
ACTOR_ID = "im_broke~youtube-transcript-scraper"

TRANSCRIPT_ITEM = {
    "title": "Never Gonna Give You Up",
    "duration": 213,
    "transcript": [
        {"text": "We're no strangers to love", "start": 0.0, "duration": 2.5},
        {"text": "You know the rules and so do I", "start": 2.5, "duration": 3.0},
        {"text": "A full commitment's what I'm thinking of", "start": 5.5, "duration": 3.25},
    ],
}


def make_source(mode=ApifyMode.POLL, token="apify-token", max_wait=1.0):
    return RemoteScraperSource(
        api_token=token,
        actor_id=ACTOR_ID,
        base_url=BASE_URL,
        mode=mode,
        poll_interval=0.001,
        max_wait=max_wait,
    )


def mock_run_start():
    return respx.post(f"{BASE_URL}/v2/acts/{ACTOR_ID}/runs").mock(
        return_value=httpx.Response(201, json={"data": {"id": "run-1", "status": "READY"}})
    )


def test_classify_transcript_items():
    shape = classify_dataset_item(TRANSCRIPT_ITEM)

    assert isinstance(shape, TranscriptItemsShape)
    assert [s.offset_ms for s in shape.to_segments()] == [0, 2500, 5500]


def test_classify_captions_synthesizes_timing():
    shape = classify_dataset_item({"captions": ["a", "b", "c"]})

    assert isinstance(shape, CaptionsArrayShape)
    segments = shape.to_segments()
    assert [s.offset_ms for s in segments] == [0, 3000, 6000]
    assert [s.duration_ms for s in segments] == [3000, 3000, 3000]


def test_classify_plain_text_and_unknown_items():
    assert isinstance(classify_dataset_item({"transcriptText": "hello"}), TranscriptTextShape)

    unknown = classify_dataset_item({"foo": 1, "bar": 2})
    assert isinstance(unknown, UnrecognizedShape)
    assert unknown.keys == ["bar", "foo"]


def test_classify_tolerates_null_fields():
    shape = classify_dataset_item({"transcript": [{"text": None, "start": None, "duration": 1}]})

    assert isinstance(shape, TranscriptItemsShape)
    assert shape.items[0].text == ""
    assert shape.items[0].start == 0.0


@pytest.mark.asyncio
@respx.mock
async def test_poll_mode_success():
    start = mock_run_start()
    status = respx.get(f"{BASE_URL}/v2/actor-runs/run-1").mock(
        side_effect=[
            httpx.Response(200, json={"data": {"status": "RUNNING"}}),
            httpx.Response(200, json={"data": {"status": "SUCCEEDED"}}),
        ]
    )
    respx.get(f"{BASE_URL}/v2/actor-runs/run-1/dataset/items").mock(
        return_value=httpx.Response(200, json=[TRANSCRIPT_ITEM])
    )

    transcript = await make_source().fetch("dQw4w9WgXcQ")

    assert transcript.source == TranscriptSourceName.REMOTE_SCRAPER
    assert transcript.video_title == "Never Gonna Give You Up"
    assert transcript.duration_ms == 213_000
    assert len(transcript.segments) == 3
    assert status.call_count == 2

    request = start.calls.last.request
    assert request.url.params["token"] == "apify-token"
    assert b"https://www.youtube.com/watch?v=dQw4w9WgXcQ" in request.content


@pytest.mark.asyncio
@respx.mock
async def test_sync_mode_with_captions_array():
    captions = [
        "We're no strangers to love",
        "You know the rules and so do I",
        "A full commitment's what I'm thinking of",
    ]
    respx.post(f"{BASE_URL}/v2/acts/{ACTOR_ID}/run-sync-get-dataset-items").mock(
        return_value=httpx.Response(201, json=[{"captions": captions}])
    )

    transcript = await make_source(mode=ApifyMode.SYNC).fetch("dQw4w9WgXcQ")

    assert [s.offset_ms for s in transcript.segments] == [0, 3000, 6000]
    assert transcript.duration_ms == 9000
    assert transcript.video_title == "Unknown"


@pytest.mark.asyncio
@respx.mock
async def test_failed_run_is_reported():
    mock_run_start()
    respx.get(f"{BASE_URL}/v2/actor-runs/run-1").mock(
        return_value=httpx.Response(200, json={"data": {"status": "FAILED"}})
    )

    _, outcome = await make_source().attempt("dQw4w9WgXcQ")

    assert outcome.status == SourceStatus.FAILED
    assert outcome.reason == "Apify run failed with status: FAILED"


@pytest.mark.asyncio
@respx.mock
async def test_poll_timeout():
    mock_run_start()
    respx.get(f"{BASE_URL}/v2/actor-runs/run-1").mock(
        return_value=httpx.Response(200, json={"data": {"status": "RUNNING"}})
    )

    _, outcome = await make_source(max_wait=0.005).attempt("dQw4w9WgXcQ")

    assert outcome.status == SourceStatus.FAILED
    assert "timed out" in outcome.reason


@pytest.mark.asyncio
@respx.mock
async def test_http_error_status_is_classified():
    respx.post(f"{BASE_URL}/v2/acts/{ACTOR_ID}/runs").mock(
        return_value=httpx.Response(401, text="invalid token")
    )

    _, outcome = await make_source().attempt("dQw4w9WgXcQ")

    assert outcome.status == SourceStatus.FAILED
    assert outcome.reason == "Apify API error: 401 - invalid token"


@pytest.mark.asyncio
@respx.mock
async def test_empty_dataset_fails():
    respx.post(f"{BASE_URL}/v2/acts/{ACTOR_ID}/run-sync-get-dataset-items").mock(
        return_value=httpx.Response(201, json=[])
    )

    _, outcome = await make_source(mode=ApifyMode.SYNC).attempt("dQw4w9WgXcQ")

    assert outcome.status == SourceStatus.FAILED
    assert outcome.reason == "No transcript data returned from Apify"


@pytest.mark.asyncio
async def test_missing_token_is_skipped():
    transcript, outcome = await make_source(token=None).attempt("dQw4w9WgXcQ")

    assert transcript is None
    assert outcome.status == SourceStatus.SKIPPED
    assert outcome.reason == "APIFY_API_TOKEN not set"


@pytest.mark.asyncio
@respx.mock
async def test_dataset_below_floor_after_annotations_fails():
    respx.post(f"{BASE_URL}/v2/acts/{ACTOR_ID}/run-sync-get-dataset-items").mock(
        return_value=httpx.Response(201, json=[{"captions": ["[Music]"] * 20 + ["hi there"]}])
    )

    transcript, outcome = await make_source(mode=ApifyMode.SYNC).attempt("dQw4w9WgXcQ")

    assert transcript is None
    assert outcome.status == SourceStatus.FAILED
    assert outcome.reason == "Transcript empty or too short (8 chars)"


@pytest.mark.asyncio
@respx.mock
async def test_non_json_dataset_is_classified():
    mock_run_start()
    respx.get(f"{BASE_URL}/v2/actor-runs/run-1").mock(
        return_value=httpx.Response(200, json={"data": {"status": "SUCCEEDED"}})
    )
    respx.get(f"{BASE_URL}/v2/actor-runs/run-1/dataset/items").mock(
        return_value=httpx.Response(200, text="<html>Bad gateway</html>")
    )

    _, outcome = await make_source().attempt("dQw4w9WgXcQ")

    assert outcome.status == SourceStatus.FAILED
    assert outcome.reason == "Apify returned invalid JSON"


@pytest.mark.asyncio
@respx.mock
async def test_poll_ceiling_counts_request_time():
    mock_run_start()
    clock = iter([0.0, 0.5, 2.0])
    respx.get(f"{BASE_URL}/v2/actor-runs/run-1").mock(
        return_value=httpx.Response(200, json={"data": {"status": "RUNNING"}})
    )

    with patch("carousel.services.transcript.apify.monotonic", side_effect=lambda: next(clock)):
        _, outcome = await make_source(max_wait=1.0).attempt("dQw4w9WgXcQ")

    assert outcome.status == SourceStatus.FAILED
    assert outcome.reason == "Apify run timed out after 1 seconds"
