"""Headless browser backend used by get_url_content.

Thin adapter over Playwright's Chromium: launch once, render pages on demand
and hand the HTML to trafilatura for plain-text extraction.
"""
from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright
from trafilatura import extract

from searxng_mcp.utils.logger import get_logger


BLOCKED_RESOURCE_TYPES = {"image", "media", "font", "stylesheet"}


@dataclass
class ScraperOptions:
    headless: bool = True
    ignore_https_errors: bool = True
    block_resources: bool = False
    cache_size: int = 1000
    enable_gpu: bool = False
    proxy_url: Optional[str] = None


@dataclass
class PageContent:
    text: str
    html: str
    title: str


@dataclass
class ScrapeResult:
    url: str
    status: Optional[int]
    content: PageContent


class PlaywrightScraper:
    def __init__(self, options: ScraperOptions):
        self.options = options
        self.logger = get_logger("scraper")
        self._cache: "OrderedDict[str, ScrapeResult]" = OrderedDict()
        self._playwright: Any = None
        self._browser: Any = None
        self._context: Any = None

    async def init(self) -> None:
        self._playwright = await async_playwright().start()
        args = [] if self.options.enable_gpu else ["--disable-gpu"]
        launch_kwargs: dict = {"headless": self.options.headless, "args": args}
        if self.options.proxy_url:
            launch_kwargs["proxy"] = {"server": self.options.proxy_url}
        self._browser = await self._playwright.chromium.launch(**launch_kwargs)
        self._context = await self._browser.new_context(
            ignore_https_errors=self.options.ignore_https_errors
        )
        if self.options.block_resources:
            await self._context.route("**/*", self._route_resource)

    async def _route_resource(self, route: Any) -> None:
        if route.request.resource_type in BLOCKED_RESOURCE_TYPES:
            await route.abort()
        else:
            await route.continue_()

    # --- LRU cache helpers ---
    def _cache_get(self, url: str) -> Optional[ScrapeResult]:
        hit = self._cache.get(url)
        if hit is not None:
            self._cache.move_to_end(url)
        return hit

    def _cache_put(self, url: str, result: ScrapeResult) -> None:
        if self.options.cache_size <= 0:
            return
        self._cache[url] = result
        self._cache.move_to_end(url)
        while len(self._cache) > self.options.cache_size:
            self._cache.popitem(last=False)

    async def scrape_page(self, url: str) -> Optional[ScrapeResult]:
        """Render url and return its content, or None when navigation fails."""
        cached = self._cache_get(url)
        if cached is not None:
            self.logger.debug(f"Scrape cache hit: {url}")
            return cached
        if self._context is None:
            raise RuntimeError("Scraper used before init()")

        page = await self._context.new_page()
        try:
            response = await page.goto(url, wait_until="domcontentloaded")
            html = await page.content()
            title = await page.title()
            text = extract(html, url=url)
            if not text:
                text = await page.inner_text("body")
        except PlaywrightError as e:
            self.logger.warning(f"Navigation to {url} failed: {e}")
            return None
        finally:
            await page.close()

        result = ScrapeResult(
            url=url,
            status=response.status if response is not None else None,
            content=PageContent(text=text or "", html=html, title=title),
        )
        self._cache_put(url, result)
        return result

    async def close(self) -> None:
        if self._context is not None:
            await self._context.close()
            self._context = None
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
