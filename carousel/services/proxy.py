from typing import Optional
import uuid
from loguru import logger

from carousel.models.proxy import ProxyConfig


class ProxyService:
    """Builds rotating DataImpulse proxy endpoints for the scraping sources."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        login: Optional[str] = None,
        password: Optional[str] = None,
    ):
        self.host = host
        self.port = port
        self.login = login
        self.password = password

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.port and self.login and self.password)

    def get_proxies(self) -> Optional[ProxyConfig]:
        """
        Constructs the authenticated proxy URL for DataImpulse.
        Appends a random session ID to the login to force a new IP for every request.
        Returns None when the proxy is not configured (direct connection).
        """
        if not self.is_configured:
            logger.debug("Proxy settings not fully configured. Using direct connection.")
            return None

        # Random session ID forces IP rotation
        session_id = str(uuid.uuid4())
        # DataImpulse format: login__session-ID
        login_with_session = f"{self.login}__session-{session_id}"

        proxy_url = (
            f"http://{login_with_session}:{self.password}"
            f"@{self.host}:{self.port}"
        )

        logger.info(f"Using DataImpulse proxy configuration (Session: {session_id})")
        return ProxyConfig(http=proxy_url, https=proxy_url, session_id=session_id)
