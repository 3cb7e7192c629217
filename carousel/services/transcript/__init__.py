"""
Transcript acquisition: a resolver over prioritized, interchangeable sources.
"""
from carousel.services.transcript.base import TranscriptSource
from carousel.services.transcript.resolver import TranscriptResolver
from carousel.services.transcript.innertube import NativeCaptionsSource
from carousel.services.transcript.scraper import ScraperLibrarySource
from carousel.services.transcript.apify import RemoteScraperSource
from carousel.services.transcript.audio import AudioTranscriptionSource

__all__ = [
    "TranscriptSource",
    "TranscriptResolver",
    "NativeCaptionsSource",
    "ScraperLibrarySource",
    "RemoteScraperSource",
    "AudioTranscriptionSource",
]
