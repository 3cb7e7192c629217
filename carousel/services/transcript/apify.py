"""
Remote scraping-service source backed by an Apify actor.

Apify runs the scraper on its own infrastructure, so this source works from
servers where YouTube blocks direct caption requests.
"""
import asyncio
from time import monotonic
from typing import Any, Optional

import httpx
from loguru import logger

from carousel.core.constants import ApifyConfig
from carousel.models.apify import (
    ApifyItemMeta,
    TranscriptTextShape,
    UnrecognizedShape,
    classify_dataset_item,
)
from carousel.models.enums import ApifyMode, TranscriptSourceName
from carousel.models.transcript import Transcript
from carousel.services.transcript.base import TranscriptSource
from carousel.services.youtube import watch_url
from carousel.services.transcript.errors import (
    EmptyResult,
    RemoteJobTimeout,
    ServiceError,
    SourceNotConfigured,
    SourceRemoteJobFailed,
    SourceTransportError,
)


class RemoteScraperSource(TranscriptSource):
    """
    Transcript scraped by an Apify actor run.

    Two modes are supported:

    - ``poll``: start a run, poll its status every ``poll_interval`` seconds
      until it reaches a terminal state or ``max_wait`` elapses, then read the
      run's dataset. A run that outlives the ceiling is not aborted and may
      keep running (and billing) on Apify's side.
    - ``sync``: a single request that blocks server-side until the run
      finishes and returns the dataset items directly.
    """

    name = TranscriptSourceName.REMOTE_SCRAPER
    credential_env = "APIFY_API_TOKEN"

    def __init__(
        self,
        api_token: Optional[str],
        actor_id: str,
        base_url: str = "https://api.apify.com",
        mode: ApifyMode = ApifyMode.POLL,
        poll_interval: float = 2.0,
        max_wait: float = 60.0,
        timeout: float = 20.0,
    ):
        self.api_token = api_token
        self.actor_id = actor_id
        self.base_url = base_url
        self.mode = mode
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.api_token)

    async def fetch(self, video_id: str) -> Transcript:
        if not self.api_token:
            raise SourceNotConfigured(f"{self.credential_env} not configured")

        logger.info(f"Trying Apify transcript scraper for video {video_id} ({self.mode.value} mode)")
        video_url = watch_url(video_id)
        run_input = {"urls": [video_url], "maxRetries": ApifyConfig.MAX_RETRIES}

        timeout = httpx.Timeout(self.timeout)
        if self.mode == ApifyMode.SYNC:
            timeout = httpx.Timeout(self.timeout, read=self.max_wait + self.timeout)

        async with httpx.AsyncClient(
            base_url=self.base_url,
            params={"token": self.api_token},
            timeout=timeout,
        ) as http:
            try:
                if self.mode == ApifyMode.SYNC:
                    items = await self._run_sync(http, run_input)
                else:
                    items = await self._run_and_poll(http, run_input)
            except httpx.HTTPError as e:
                raise SourceTransportError(f"Apify request failed: {e!r}") from e

        transcript = self._to_transcript(items)
        logger.info(f"Apify transcript retrieved ({len(transcript.text)} chars)")
        return transcript

    async def _run_and_poll(self, http: httpx.AsyncClient, run_input: dict) -> Any:
        response = await http.post(f"/v2/acts/{self.actor_id}/runs", json=run_input)
        run_id = _data(_checked(response)).get("id")
        if not run_id:
            raise SourceTransportError("Apify did not return a run id")

        logger.info(f"Apify run started: {run_id}, waiting for completion...")

        deadline = monotonic() + self.max_wait
        while True:
            await asyncio.sleep(self.poll_interval)

            status_response = await http.get(f"/v2/actor-runs/{run_id}")
            status = _data(_checked(status_response)).get("status")

            if status == ApifyConfig.SUCCEEDED:
                logger.info("Apify run completed successfully")
                break
            if status in ApifyConfig.TERMINAL_FAILURES:
                raise SourceRemoteJobFailed(f"Apify run failed with status: {status}")

            if monotonic() >= deadline:
                raise RemoteJobTimeout(f"Apify run timed out after {self.max_wait:.0f} seconds")
            logger.debug(f"Apify run status: {status}, waiting...")

        dataset_response = await http.get(f"/v2/actor-runs/{run_id}/dataset/items")
        return _json(_checked(dataset_response))

    async def _run_sync(self, http: httpx.AsyncClient, run_input: dict) -> Any:
        response = await http.post(
            f"/v2/acts/{self.actor_id}/run-sync-get-dataset-items",
            params={"timeout": int(self.max_wait)},
            json=run_input,
        )
        if response.status_code == 408:
            raise RemoteJobTimeout(f"Apify run timed out after {self.max_wait:.0f} seconds")
        return _json(_checked(response))

    def _to_transcript(self, items: Any) -> Transcript:
        if not isinstance(items, list) or not items:
            raise EmptyResult("No transcript data returned from Apify")

        item = items[0]
        shape = classify_dataset_item(item)
        if isinstance(shape, UnrecognizedShape):
            raise EmptyResult(f"Unrecognized Apify result (fields: {', '.join(shape.keys) or 'none'})")

        segments = shape.to_segments()
        if isinstance(shape, TranscriptTextShape):
            pieces = [shape.text]
        else:
            pieces = [s.text for s in segments]

        meta = ApifyItemMeta.model_validate(item)
        return self.build_transcript(
            pieces,
            segments,
            video_title=meta.title,
            duration_ms=int(meta.duration * 1000) if meta.duration else None,
        )


def _checked(response: httpx.Response) -> httpx.Response:
    if not response.is_success:
        raise ServiceError("Apify", response.status_code, response.text)
    return response


def _json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise SourceTransportError("Apify returned invalid JSON") from e


def _data(response: httpx.Response) -> dict:
    payload = _json(response)
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        raise SourceTransportError("Unexpected Apify response: missing 'data'")
    return data
