"""
Pydantic model for the outbound proxy used by scraping transcript sources.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ProxyConfig(BaseModel):
    """Per-request proxy endpoints (one rotated session per instance)."""

    http: Optional[str] = None
    https: Optional[str] = None
    session_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def url(self) -> Optional[str]:
        """Single proxy URL for clients that take one (yt-dlp, httpx)."""
        return self.https or self.http
