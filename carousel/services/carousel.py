"""
Carousel orchestration: transcript -> concepts -> Instagram copy.
"""
import time

from loguru import logger

from carousel.core.constants import ConceptConfig, TranscriptConfig
from carousel.models.carousel import CarouselPackage
from carousel.models.transcript import Transcript
from carousel.services.concepts import ConceptExtractor
from carousel.services.copywriter import generate_copy
from carousel.services.transcript import TranscriptResolver
from carousel.services.youtube import require_video_id

MANUAL_VIDEO_ID = "manual"
MANUAL_VIDEO_TITLE = "Custom Transcript"
FALLBACK_VIDEO_TITLE = "YouTube Video"

DEMO_VIDEO_ID = "demo"
DEMO_VIDEO_TITLE = "Productivity & Time Management Tips"
DEMO_TRANSCRIPT = (
    "Welcome to this comprehensive guide on productivity and time management. "
    "The first key concept is the Pomodoro Technique, which involves working in focused "
    "25-minute intervals followed by short breaks. "
    "This method helps maintain concentration and prevents burnout. "
    "The second important strategy is task batching, where you group similar tasks together "
    "to minimize context switching. "
    "Studies show that context switching can reduce productivity by up to 40 percent. "
    "Another crucial tip is to tackle your most important task first thing in the morning "
    "when your energy levels are highest. "
    "This is often called eating the frog. "
    "Digital minimalism is also essential in today's world. "
    "Turn off unnecessary notifications and designate specific times to check email and social media. "
    "Finally, remember that rest is productive. "
    "Quality sleep and regular breaks actually improve your overall output. "
    "The key to sustainable productivity is balance, not burnout."
)


class CarouselService:
    """
    Turns a YouTube URL or pasted text into a carousel package.

    Example:
        service = CarouselService(resolver, ConceptExtractor())
        package = await service.process_url("https://youtu.be/dQw4w9WgXcQ")
    """

    def __init__(self, resolver: TranscriptResolver, concept_extractor: ConceptExtractor):
        self.resolver = resolver
        self.concept_extractor = concept_extractor

    async def get_transcript(self, url: str) -> Transcript:
        """
        Resolve a URL or bare id to its transcript.

        Raises:
            InvalidIdentifier: Before any source runs, if the input is not a
                recognizable YouTube URL or id.
            AllSourcesExhausted: If no source produced a transcript.
        """
        video_id = require_video_id(url)
        return await self.resolver.resolve(video_id)

    async def process_url(self, url: str, slide_count: int = ConceptConfig.DEFAULT_SLIDE_COUNT) -> CarouselPackage:
        video_id = require_video_id(url)
        transcript = await self.resolver.resolve(video_id)

        title = transcript.video_title
        if not title or title == TranscriptConfig.DEFAULT_VIDEO_TITLE:
            title = FALLBACK_VIDEO_TITLE

        return await self._build(video_id, title, transcript.text, slide_count)

    async def process_text(self, text: str, slide_count: int = ConceptConfig.DEFAULT_SLIDE_COUNT) -> CarouselPackage:
        return await self._build(MANUAL_VIDEO_ID, MANUAL_VIDEO_TITLE, text.strip(), slide_count)

    async def demo(self) -> CarouselPackage:
        package = await self._build(
            DEMO_VIDEO_ID, DEMO_VIDEO_TITLE, DEMO_TRANSCRIPT, ConceptConfig.DEFAULT_SLIDE_COUNT
        )
        return package.model_copy(update={"is_demo": True})

    async def _build(self, video_id: str, video_title: str, text: str, slide_count: int) -> CarouselPackage:
        start_time = time.perf_counter()

        concepts = await self.concept_extractor.extract(text, slide_count)
        instagram_copy = generate_copy(concepts, text)

        logger.info(
            f"Carousel for {video_id}: {len(concepts)} concepts "
            f"in {time.perf_counter() - start_time:.2f}s"
        )
        return CarouselPackage(
            video_id=video_id,
            video_title=video_title,
            concepts=concepts,
            instagram_copy=instagram_copy,
            slide_count=len(concepts),
        )
