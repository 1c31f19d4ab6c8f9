import asyncio

import pytest
from conftest import FakeScraper

from searxng_mcp.errors import FetchError, NotReadyError
from searxng_mcp.tools.scraper.fetcher import ContentFetcher
from searxng_mcp.tools.scraper.manager import ScraperManager


def _ready_manager(scheduler, pages):
    scraper = FakeScraper(pages=pages)
    manager = ScraperManager(factory=lambda options: scraper, scheduler=scheduler)
    asyncio.run(manager.initialize())
    return manager, scraper


def test_not_ready_never_reaches_backend(scheduler):
    scraper = FakeScraper(fail_init=True, pages={"https://a.test": "x"})
    manager = ScraperManager(factory=lambda options: scraper, scheduler=scheduler)
    fetcher = ContentFetcher(manager)

    for _ in range(3):
        with pytest.raises(NotReadyError, match="Puppeteer is not ready"):
            asyncio.run(fetcher.fetch_content("https://a.test"))

    asyncio.run(manager.initialize())
    with pytest.raises(NotReadyError):
        asyncio.run(fetcher.fetch_content("https://a.test"))
    assert scraper.scraped == []


def test_returns_extracted_text(scheduler):
    manager, scraper = _ready_manager(scheduler, {"https://a.test": "Hello page"})
    fetcher = ContentFetcher(manager)
    assert asyncio.run(fetcher.fetch_content("https://a.test")) == "Hello page"
    assert scraper.scraped == ["https://a.test"]


def test_missing_result_raises_fetch_error(scheduler):
    manager, _ = _ready_manager(scheduler, {})
    fetcher = ContentFetcher(manager)
    with pytest.raises(FetchError, match="Failed to fetch the URL: https://gone.test"):
        asyncio.run(fetcher.fetch_content("https://gone.test"))


def test_slow_scrape_times_out(scheduler):
    class SlowScraper(FakeScraper):
        async def scrape_page(self, url):
            await asyncio.sleep(1)

    manager = ScraperManager(factory=SlowScraper, scheduler=scheduler)
    asyncio.run(manager.initialize())
    fetcher = ContentFetcher(manager, timeout=0.01)
    with pytest.raises(FetchError, match="Timed out"):
        asyncio.run(fetcher.fetch_content("https://slow.test"))


def test_backend_errors_propagate(scheduler):
    class BrokenScraper(FakeScraper):
        async def scrape_page(self, url):
            raise RuntimeError("page crashed")

    manager = ScraperManager(factory=BrokenScraper, scheduler=scheduler)
    asyncio.run(manager.initialize())
    with pytest.raises(RuntimeError, match="page crashed"):
        asyncio.run(ContentFetcher(manager).fetch_content("https://a.test"))
