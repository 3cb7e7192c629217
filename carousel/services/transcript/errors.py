"""
Failure taxonomy for transcript sources.

Sources raise these from ``fetch``; ``TranscriptSource.attempt`` turns them
into a ``SourceOutcome``. Nothing outside a source inspects these types.
"""
from typing import Optional


class TranscriptSourceError(Exception):
    """Base class for a classified source failure."""


class SourceNotConfigured(TranscriptSourceError):
    """Required credential is absent. Recorded as a skip, not a failure."""


class SourceEmptyOrTooShort(TranscriptSourceError):
    """Source returned nothing, or text below the acceptance floor."""


EmptyTranscript = SourceEmptyOrTooShort
EmptyResult = SourceEmptyOrTooShort


class NoCaptionsAvailable(TranscriptSourceError):
    """Video has no caption track this source can read."""


class SourceTransportError(TranscriptSourceError):
    """Network or HTTP failure talking to the backing service."""


class ServiceError(SourceTransportError):
    """Backing service answered with a non-success HTTP status."""

    def __init__(self, service: str, status: int, body: Optional[str] = None):
        self.service = service
        self.status = status
        self.body = body
        message = f"{service} API error: {status}"
        if body:
            message = f"{message} - {body[:200]}"
        super().__init__(message)


class DownloadFailed(SourceTransportError):
    """Audio download tool failed; message is the tool's own output."""


class SourceRemoteJobFailed(TranscriptSourceError):
    """A delegated job reported a terminal failure status."""


class RemoteJobTimeout(SourceRemoteJobFailed):
    """A delegated job did not finish before the polling ceiling."""


class TranscriptionFailed(SourceRemoteJobFailed):
    """Speech-to-text service reported an error for the job."""
