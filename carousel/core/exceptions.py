"""
Custom exception classes and RFC 7807 error handling.
"""
from typing import Optional, Sequence

from loguru import logger
from pydantic import BaseModel, ConfigDict
from fastapi import Request
from fastapi.responses import JSONResponse

from carousel.models.enums import SourceStatus
from carousel.models.transcript import SourceOutcome


class ErrorResponse(BaseModel):
    """RFC 7807 Problem Details response model."""
    type: str
    title: str
    status: int
    detail: str
    instance: Optional[str] = None
    suggestion: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
        suggestion: Optional[str] = None,
    ):
        self.status_code = status_code
        self.error_type = error_type
        self.title = title
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(detail)


class BadRequestError(AppException):
    """Bad request exception."""

    def __init__(self, detail: str, suggestion: Optional[str] = None):
        super().__init__(
            status_code=400,
            error_type="https://problems.example.com/bad-request",
            title="Bad Request",
            detail=detail,
            suggestion=suggestion,
        )


class InvalidIdentifier(BadRequestError):
    """Raw input does not look like any recognized YouTube URL or video id."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(detail=f"Invalid YouTube URL or video id: '{raw}'")


class ConceptExtractionError(BadRequestError):
    """Transcript cannot be reduced to carousel concepts."""


class AllSourcesExhausted(AppException):
    """
    Every transcript source was either skipped or failed.

    Carries the ordered per-source outcomes so the caller can see which
    fallbacks ran, why each failed, and which credential would enable the
    ones that were skipped.
    """

    def __init__(
        self,
        video_id: str,
        outcomes: Sequence[SourceOutcome],
        enable_hints: Optional[dict] = None,
    ):
        self.video_id = video_id
        self.outcomes = list(outcomes)
        self.enable_hints = enable_hints or {}
        super().__init__(
            status_code=422,
            error_type="https://problems.example.com/transcript-unavailable",
            title="Transcript Unavailable",
            detail=self._describe(),
            suggestion="You can paste the transcript manually instead of a URL.",
        )

    @property
    def attempted(self) -> list[SourceOutcome]:
        return [o for o in self.outcomes if o.attempted]

    @property
    def skipped(self) -> list[SourceOutcome]:
        return [o for o in self.outcomes if o.status == SourceStatus.SKIPPED]

    def _describe(self) -> str:
        parts = []
        for outcome in self.outcomes:
            name = outcome.source.value
            if outcome.status == SourceStatus.SKIPPED:
                hint = self.enable_hints.get(outcome.source)
                label = f"not configured (set {hint} to enable)" if hint else "not configured"
                parts.append(f"{name}: {label}")
            else:
                parts.append(f"{name}: failed ({outcome.reason or 'unknown error'})")
        return (
            f"Could not obtain a transcript for video '{self.video_id}'. "
            + "; ".join(parts)
        )


TranscriptUnavailable = AllSourcesExhausted


class InternalServerError(AppException):
    """Internal server error exception."""

    def __init__(self, detail: str = "An unexpected error occurred."):
        super().__init__(
            status_code=500,
            error_type="https://problems.example.com/internal-error",
            title="Internal Server Error",
            detail=detail,
        )


def create_error_response(
    request: Request,
    status_code: int,
    error_type: str,
    title: str,
    detail: str,
    suggestion: Optional[str] = None,
) -> JSONResponse:
    """Create a RFC 7807 compliant JSON error response."""
    error = ErrorResponse(
        type=error_type,
        title=title,
        status=status_code,
        detail=detail,
        instance=str(request.url.path),
        suggestion=suggestion,
    )
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(exclude_none=True),
        media_type="application/problem+json",
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle AppException and return RFC 7807 response."""
    return create_error_response(
        request=request,
        status_code=exc.status_code,
        error_type=exc.error_type,
        title=exc.title,
        detail=exc.detail,
        suggestion=exc.suggestion,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and hide their details behind a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return await app_exception_handler(request, InternalServerError())
