from __future__ import annotations

import asyncio

from searxng_mcp.errors import FetchError, NotReadyError
from searxng_mcp.tools.scraper.manager import ScraperManager
from searxng_mcp.utils.logger import get_logger


class ContentFetcher:
    """Plain-text page content for the get_url_content tool"""

    def __init__(self, manager: ScraperManager, timeout: float = 10.0):
        self.manager = manager
        self.timeout = timeout
        self.logger = get_logger("fetch_mcp")

    async def fetch_content(self, url: str) -> str:
        scraper = self.manager.scraper
        if not self.manager.is_ready or scraper is None:
            raise NotReadyError()

        try:
            result = await asyncio.wait_for(scraper.scrape_page(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            self.logger.error(f"Error during scrape: timed out after {self.timeout:g}s ({url})")
            raise FetchError(f"Timed out fetching the URL after {self.timeout:g} seconds: {url}")
        except Exception as e:
            self.logger.error(f"Error during scrape: {e}")
            raise

        if result is None:
            raise FetchError(f"Failed to fetch the URL: {url}")
        return result.content.text
