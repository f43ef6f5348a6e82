"""
Plain HTTP fetcher backed by httpx.
"""

from __future__ import annotations

from typing import Optional

import httpx
import structlog

from ..errors import FetchError
from .base import FetchResponse

logger = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = "pagemeta/0.1 (+https://github.com/pagemeta/pagemeta)"


class StandardHTTPFetcher:
    """Fetch pages directly over HTTP."""

    name = "standard"

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        follow_redirects: bool = True,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.follow_redirects = follow_redirects
        self._client = client

    def _headers(self) -> dict:
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }

    def fetch(self, url: str) -> FetchResponse:
        logger.debug("Fetching HTML", url=url, fetcher=self.name)
        client = self._client or httpx.Client(timeout=self.timeout, follow_redirects=self.follow_redirects)
        try:
            response = client.get(url, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(f"failed to fetch {url}: {e}") from e
        finally:
            if self._client is None:
                client.close()

        return FetchResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            url=str(response.url),
        )
