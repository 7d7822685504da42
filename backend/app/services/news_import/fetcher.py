"""HTTP access to the scraped site."""

import logging
from typing import Optional

import httpx

from app.services.news_import.constants import ACCEPT_HEADER, USER_AGENT
from app.services.news_import.exceptions import UpstreamFetchError

logger = logging.getLogger(__name__)


class PageFetcher:
    """Fetch HTML pages with the fixed scraper User-Agent.

    Requests are made one at a time; there is no retry and no timeout beyond
    the httpx default.
    """

    def __init__(
        self,
        user_agent: str = USER_AGENT,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.user_agent = user_agent
        self._transport = transport

    async def fetch(self, url: str) -> str:
        """Return the page body, raising ``UpstreamFetchError`` on any failure."""
        headers = {
            "User-Agent": self.user_agent,
            "Accept": ACCEPT_HEADER,
        }

        try:
            async with httpx.AsyncClient(
                headers=headers,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise UpstreamFetchError(url) from e

        if not response.is_success:
            logger.warning(f"{url} returned HTTP {response.status_code}")
            raise UpstreamFetchError(url, response.status_code)

        return response.text
