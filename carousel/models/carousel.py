from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from carousel.models.enums import SlideType

# --- LLM Parsing Models ---

class RawConcept(BaseModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)

    model_config = ConfigDict(extra='ignore')

class RawConceptList(BaseModel):
    concepts: List[RawConcept] = Field(min_length=1)

    model_config = ConfigDict(extra='ignore')

# --- Core Data Models ---

class Concept(BaseModel):
    slide_number: int
    title: str
    content: str
    position: float = 0.0  # Relative position in the transcript (0.0-1.0)
    is_intro: bool = False
    is_outro: bool = False
    ai_generated: bool = False

class InstagramCopy(BaseModel):
    caption: str
    hashtags: str
    hashtags_list: List[str]
    cta: str
    full_post: str
    character_count: int

    model_config = ConfigDict(frozen=True)

class SlidePrompt(BaseModel):
    slide_number: int
    type: SlideType
    title: str
    prompt: str
    filename: str
    content: Optional[str] = None
    original_title: Optional[str] = None
    thumbnail_url: Optional[str] = None

    model_config = ConfigDict(frozen=True)

class CarouselPackage(BaseModel):
    video_id: str
    video_title: str
    concepts: List[Concept]
    instagram_copy: InstagramCopy
    slide_count: int
    is_demo: bool = False
