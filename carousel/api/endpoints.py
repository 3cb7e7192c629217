"""
API endpoints for transcript extraction, carousel generation and slide prompts.
"""
import time

from fastapi import APIRouter, Depends, Request
from loguru import logger

from carousel.api.dependencies import get_carousel_service, get_slide_service
from carousel.core.constants import RateLimitConfig
from carousel.core.exceptions import BadRequestError
from carousel.core.limiter import limiter
from carousel.models.api import (
    CarouselResponse,
    ProcessRequest,
    ProcessTextRequest,
    SlidesRequest,
    SlidesResponse,
    ThumbnailResponse,
    TranscriptRequest,
    TranscriptResponse,
)
from carousel.models.carousel import CarouselPackage
from carousel.services.carousel import CarouselService
from carousel.services.slides import SlideService, thumbnail_for
from carousel.services.youtube import VIDEO_ID_LENGTH, require_video_id, thumbnail_url

router = APIRouter()


def _carousel_response(package: CarouselPackage) -> CarouselResponse:
    return CarouselResponse(**package.model_dump())


@router.get("/demo", response_model=CarouselResponse)
async def demo(carousel_service: CarouselService = Depends(get_carousel_service)):
    """
    Generates a carousel from a built-in sample transcript.

    Useful for trying the frontend without a YouTube URL or any API key.
    """
    package = await carousel_service.demo()
    return _carousel_response(package)


@router.post("/transcript", response_model=TranscriptResponse)
@limiter.limit(RateLimitConfig.TRANSCRIPT)
async def get_transcript(
    request: Request,
    payload: TranscriptRequest,
    carousel_service: CarouselService = Depends(get_carousel_service),
):
    """
    Resolves the transcript of a YouTube video through the source fallback chain.

    Rate limit: 10 requests per minute.

    Args:
        request: FastAPI request object (required for rate limiting).
        payload: The request body containing the video URL or id.
        carousel_service: The service handling the business logic.

    Returns:
        TranscriptResponse: The video id and its normalized transcript.
    """
    logger.info(f"Incoming transcript request for URL: {payload.url}")

    video_id = require_video_id(payload.url)
    transcript = await carousel_service.get_transcript(video_id)
    return TranscriptResponse(video_id=video_id, transcript=transcript)


@router.post("/process", response_model=CarouselResponse)
@limiter.limit(RateLimitConfig.PROCESS)
async def process_video(
    request: Request,
    payload: ProcessRequest,
    carousel_service: CarouselService = Depends(get_carousel_service),
):
    """
    Generates carousel concepts and Instagram copy for a video.

    A pasted transcript longer than 50 characters takes precedence over the
    URL, so users can recover when no transcript source works for a video.

    Rate limit: 10 requests per minute.
    """
    start_time = time.perf_counter()

    manual = payload.manual_transcript
    if manual:
        logger.info(f"Processing pasted transcript ({len(manual)} chars)")
        package = await carousel_service.process_text(manual, payload.slide_count)
    elif payload.url:
        logger.info(f"Processing video URL: {payload.url}")
        package = await carousel_service.process_url(payload.url, payload.slide_count)
    else:
        raise BadRequestError("URL or transcript text is required")

    duration = time.perf_counter() - start_time
    logger.info(f"Carousel generation completed in {duration:.2f}s")
    return _carousel_response(package)


@router.post("/process-text", response_model=CarouselResponse)
@limiter.limit(RateLimitConfig.PROCESS)
async def process_text(
    request: Request,
    payload: ProcessTextRequest,
    carousel_service: CarouselService = Depends(get_carousel_service),
):
    """Generates carousel concepts and Instagram copy from pasted text."""
    package = await carousel_service.process_text(payload.text, payload.slide_count)
    return _carousel_response(package)


@router.post("/slides", response_model=SlidesResponse)
@limiter.limit(RateLimitConfig.SLIDES)
async def generate_slides(
    request: Request,
    payload: SlidesRequest,
    slide_service: SlideService = Depends(get_slide_service),
):
    """
    Builds image-generation prompts for every slide of a carousel.

    Rate limit: 30 requests per minute.
    """
    slides = await slide_service.generate_slide_prompts(
        payload.concepts,
        video_id=payload.video_id,
        video_title=payload.video_title,
    )
    return SlidesResponse(
        slides=slides,
        thumbnail_url=thumbnail_for(payload.video_id),
        message=f"Generated {len(slides)} slide prompts. Image rendering is not available; returning prompts only.",
    )


@router.get("/thumbnail/{video_id}", response_model=ThumbnailResponse)
async def get_thumbnail(video_id: str):
    """Returns the high-resolution thumbnail URL for a video id."""
    if len(video_id) != VIDEO_ID_LENGTH:
        raise BadRequestError("Invalid video ID")
    return ThumbnailResponse(video_id=video_id, thumbnail_url=thumbnail_url(video_id))
