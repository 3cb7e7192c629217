"""
Dependency injection factories for FastAPI.

Every factory is cached: sources and providers are process-wide singletons
built from settings. A missing credential yields a source that reports
itself as not configured rather than an error.
"""
from functools import lru_cache
from typing import Optional

from fastapi import Depends

from carousel.core.config import settings
from carousel.core.providers.gemini_provider import GeminiProvider
from carousel.core.providers.groq_provider import GroqProvider
from carousel.core.providers.groq_speech import GroqSpeechToText
from carousel.core.providers.llm_provider import LLMProvider
from carousel.core.providers.speech_provider import SpeechToTextProvider
from carousel.models.enums import LLMProviderType
from carousel.services.carousel import CarouselService
from carousel.services.concepts import ConceptExtractor
from carousel.services.proxy import ProxyService
from carousel.services.slides import SlideService
from carousel.services.transcript import (
    AudioTranscriptionSource,
    NativeCaptionsSource,
    RemoteScraperSource,
    ScraperLibrarySource,
    TranscriptResolver,
)


# =============================================================================
# PROVIDER FACTORIES
# =============================================================================

@lru_cache
def get_concept_llm_provider() -> Optional[LLMProvider]:
    """
    Get LLM provider for concept extraction and cover titles.

    Returns None when the selected provider has no API key, which switches
    concept extraction to its heuristic mode.
    """
    provider_type = settings.CONCEPT_LLM_PROVIDER

    if provider_type == LLMProviderType.GEMINI:
        if not settings.GEMINI_API_KEY:
            return None
        return GeminiProvider(
            api_key=settings.GEMINI_API_KEY,
            model_name=settings.GEMINI_MODEL_NAME,
        )
    elif provider_type == LLMProviderType.GROQ:
        if not settings.GROQ_API_KEY:
            return None
        return GroqProvider(
            api_key=settings.GROQ_API_KEY,
            model_name=settings.GROQ_MODEL_NAME,
        )
    else:
        raise ValueError(f"Unknown LLM provider: {provider_type}")


@lru_cache
def get_speech_provider() -> Optional[SpeechToTextProvider]:
    """Get speech-to-text provider for audio transcription, if configured."""
    if not settings.GROQ_API_KEY:
        return None
    return GroqSpeechToText(
        api_key=settings.GROQ_API_KEY,
        model_name=settings.GROQ_TRANSCRIPTION_MODEL,
    )


@lru_cache
def get_proxy_service() -> ProxyService:
    """Get proxy service for requests made directly to YouTube."""
    return ProxyService(
        host=settings.DATAIMPULSE_HOST,
        port=settings.DATAIMPULSE_PORT,
        login=settings.DATAIMPULSE_LOGIN,
        password=settings.DATAIMPULSE_PASSWORD,
    )


# =============================================================================
# TRANSCRIPT SOURCE FACTORIES
# =============================================================================

@lru_cache
def get_native_captions_source() -> NativeCaptionsSource:
    """Process-wide native captions source; its InnerTube handle is shared."""
    return NativeCaptionsSource(timeout=settings.HTTP_TIMEOUT_SECONDS)


@lru_cache
def get_scraper_source() -> ScraperLibrarySource:
    return ScraperLibrarySource(proxy_service=get_proxy_service())


@lru_cache
def get_remote_scraper_source() -> RemoteScraperSource:
    return RemoteScraperSource(
        api_token=settings.APIFY_API_TOKEN,
        actor_id=settings.APIFY_ACTOR_ID,
        base_url=settings.APIFY_BASE_URL,
        mode=settings.APIFY_MODE,
        poll_interval=settings.APIFY_POLL_INTERVAL_SECONDS,
        max_wait=settings.APIFY_MAX_WAIT_SECONDS,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )


@lru_cache
def get_audio_source() -> AudioTranscriptionSource:
    return AudioTranscriptionSource(
        speech_provider=get_speech_provider(),
        temp_dir=settings.AUDIO_TEMP_DIR,
        proxy_service=get_proxy_service(),
    )


@lru_cache
def get_transcript_resolver() -> TranscriptResolver:
    """
    Get the transcript resolver with its fixed source priority.

    Free sources come first; the billed remote scraper and audio
    transcription only run after both caption sources fail.
    """
    return TranscriptResolver(
        sources=[
            get_native_captions_source(),
            get_scraper_source(),
            get_remote_scraper_source(),
            get_audio_source(),
        ]
    )


# =============================================================================
# SERVICE FACTORIES
# =============================================================================

def get_concept_extractor(
    llm_provider: Optional[LLMProvider] = Depends(get_concept_llm_provider),
) -> ConceptExtractor:
    return ConceptExtractor(llm_provider=llm_provider)


def get_slide_service(
    llm_provider: Optional[LLMProvider] = Depends(get_concept_llm_provider),
) -> SlideService:
    return SlideService(llm_provider=llm_provider)


def get_carousel_service(
    resolver: TranscriptResolver = Depends(get_transcript_resolver),
    concept_extractor: ConceptExtractor = Depends(get_concept_extractor),
) -> CarouselService:
    """
    Get carousel service.

    Wires together:
    - TranscriptResolver for the source fallback chain
    - ConceptExtractor for LLM or heuristic concept extraction
    """
    return CarouselService(resolver=resolver, concept_extractor=concept_extractor)
