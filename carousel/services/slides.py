"""
Slide image prompts for a carousel.

Images themselves are not rendered here: each slide gets a ready-to-use
prompt for an image model plus its target file name.
"""
import re
from typing import List, Optional, Sequence

from loguru import logger

from carousel.core.prompts import SlidePrompts
from carousel.core.providers.llm_provider import LLMMessage, LLMProvider
from carousel.models.carousel import Concept, SlidePrompt
from carousel.models.enums import LLMRole, SlideType
from carousel.services.youtube import thumbnail_url

# Ids that never map to a real video
PLACEHOLDER_VIDEO_IDS = frozenset({"manual", "demo"})

_TITLE_EMOJIS = re.compile("[🎬🎯✨💡🔥⚡📌]")
_QUOTES = re.compile("['\"]")


def thumbnail_for(video_id: Optional[str]) -> Optional[str]:
    """Thumbnail URL for a real video id, None for pasted or demo content."""
    if not video_id or video_id in PLACEHOLDER_VIDEO_IDS:
        return None
    return thumbnail_url(video_id)


def strip_title_emojis(title: str) -> str:
    return _TITLE_EMOJIS.sub("", title).strip()


class SlideService:
    """
    Builds cover and content slide prompts from extracted concepts.

    With an LLM provider the cover gets a rewritten, catchier title. Any
    failure there falls back to the video's own title.
    """

    def __init__(self, llm_provider: Optional[LLMProvider] = None):
        self.llm_provider = llm_provider

    async def generate_cover_title(self, video_title: str) -> str:
        if self.llm_provider is None:
            return video_title

        try:
            response = await self.llm_provider.generate_text(
                messages=[
                    LLMMessage(
                        role=LLMRole.USER,
                        content=SlidePrompts.COVER_TITLE.format(video_title=video_title),
                    )
                ],
                temperature=0.7,
            )
        except Exception as e:
            logger.warning(f"Could not generate cover title, using original: {e}")
            return video_title

        title = _QUOTES.sub("", response.content).strip()
        if not title:
            return video_title

        logger.info(f"Generated cover title: '{title}'")
        return title

    async def generate_slide_prompts(
        self,
        concepts: Sequence[Concept],
        video_id: Optional[str] = None,
        video_title: Optional[str] = None,
    ) -> List[SlidePrompt]:
        total = len(concepts)
        cover_title = await self.generate_cover_title(video_title) if video_title else None

        slides: List[SlidePrompt] = []
        for index, concept in enumerate(concepts):
            if index == 0:
                title = cover_title or concept.title
                slides.append(
                    SlidePrompt(
                        slide_number=1,
                        type=SlideType.COVER,
                        title=title,
                        original_title=video_title,
                        prompt=SlidePrompts.COVER_IMAGE.format(
                            topic=video_title or title,
                            title=title,
                        ),
                        thumbnail_url=thumbnail_for(video_id),
                        filename="slide_01_cover.png",
                    )
                )
                continue

            number = concept.slide_number or index + 1
            title = strip_title_emojis(concept.title)
            slides.append(
                SlidePrompt(
                    slide_number=number,
                    type=SlideType.CONTENT,
                    title=title,
                    content=concept.content,
                    prompt=SlidePrompts.CONTENT_IMAGE.format(
                        number=f"{number:02d}",
                        title=title,
                        content=concept.content,
                        progress=round(number / total * 100),
                        slide_number=number,
                        total=total,
                    ),
                    filename=f"slide_{number:02d}_content.png",
                )
            )

        logger.info(f"Built {len(slides)} slide prompts for video '{video_id}'")
        return slides
