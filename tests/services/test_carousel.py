import pytest

from carousel.core.exceptions import AllSourcesExhausted, InvalidIdentifier
from carousel.services.carousel import CarouselService
from carousel.services.concepts import ConceptExtractor
from carousel.services.transcript import TranscriptResolver

TEXT = (
    "The first key concept is to start small and build habits that compound over time. "
    "The second important strategy is to measure your progress every single week. "
    "Another crucial tip is to remove distractions before you begin deep work. "
    "Finally, remember to review what worked and adjust your plan for next month."
)


@pytest.mark.asyncio
async def test_process_url_uses_video_title(make_sources):
    sources = make_sources({"text": TEXT, "title": "Habits 101"})
    service = CarouselService(TranscriptResolver(sources), ConceptExtractor())

    package = await service.process_url("https://youtu.be/dQw4w9WgXcQ", slide_count=3)

    assert package.video_id == "dQw4w9WgXcQ"
    assert package.video_title == "Habits 101"
    assert package.slide_count == len(package.concepts)
    assert not package.is_demo


@pytest.mark.asyncio
async def test_process_url_rejects_invalid_input_first(make_sources):
    sources = make_sources({"text": TEXT})
    service = CarouselService(TranscriptResolver(sources), ConceptExtractor())

    with pytest.raises(InvalidIdentifier):
        await service.process_url("https://vimeo.com/1234")

    assert sources[0].calls == 0


@pytest.mark.asyncio
async def test_process_url_propagates_exhaustion(make_sources):
    sources = make_sources({"configured": False, "credential_env": "APIFY_API_TOKEN"})
    service = CarouselService(TranscriptResolver(sources), ConceptExtractor())

    with pytest.raises(AllSourcesExhausted):
        await service.process_url("dQw4w9WgXcQ")


@pytest.mark.asyncio
async def test_process_text_marks_manual_content():
    service = CarouselService(TranscriptResolver([]), ConceptExtractor())

    package = await service.process_text(f"  {TEXT}  ", slide_count=5)

    assert package.video_id == "manual"
    assert package.video_title == "Custom Transcript"
    assert package.instagram_copy.caption.startswith("✨")


@pytest.mark.asyncio
async def test_demo_package():
    service = CarouselService(TranscriptResolver([]), ConceptExtractor())

    package = await service.demo()

    assert package.is_demo
    assert package.video_id == "demo"
    assert "#productivity" in package.instagram_copy.hashtags_list
