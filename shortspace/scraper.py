"""Page metadata scraping."""

import logging
from typing import Dict, Optional

import httpx
from bs4 import BeautifulSoup

from .errors import ScrapeError


def _meta_content(soup: BeautifulSoup, **attrs) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def parse_metadata(html: str) -> Dict[str, str]:
    """Extract title, description and preview image from an HTML page."""
    soup = BeautifulSoup(html, "html.parser")

    title = soup.title.get_text(strip=True) if soup.title else ""
    description = _meta_content(soup, name="description")

    image = _meta_content(soup, property="og:image")
    if not image:
        image = _meta_content(soup, name="twitter:image")

    return {
        "title": title,
        "description": description,
        "image": image,
    }


class MetadataScraper:
    """Fetch a page and pull out its title, description and image."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = 5.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize scraper.

        Args:
            client: Optional HTTP client (one is created if not given)
            timeout_seconds: Request timeout
            logger: Optional logger instance
        """
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=timeout_seconds,
            follow_redirects=True,
        )
        self.logger = logger or logging.getLogger(__name__)

    async def fetch(self, url: str) -> Dict[str, str]:
        """Fetch page metadata.

        Raises:
            ScrapeError: If the page cannot be fetched or is not a 200
        """
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            raise ScrapeError(f"Failed to fetch {url}: {e}") from e

        if response.status_code != 200:
            raise ScrapeError(f"Failed to fetch {url}: HTTP {response.status_code}")

        metadata = parse_metadata(response.text)
        self.logger.debug(f"Scraped metadata for {url}: {metadata}")
        return metadata

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()
