"""Background lifecycle of the shared scraping backend.

The server accepts tool calls straight away while the browser starts in the
background. A failed start is retried with exponential backoff
(15s, 30s, 60s, 120s); after the fifth failed attempt scraping stays
unavailable for the rest of the process.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol, Set

from searxng_mcp.errors import InitError
from searxng_mcp.tools.scraper.backend import PlaywrightScraper, ScraperOptions
from searxng_mcp.utils.logger import get_logger


MAX_RETRIES = 5
INITIAL_RETRY_DELAY_MS = 15000


class ScraperStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


@dataclass
class ScraperState:
    status: ScraperStatus = ScraperStatus.UNINITIALIZED
    retry_count: int = 0
    scraper: Optional[Any] = None

    @property
    def ready(self) -> bool:
        return self.status is ScraperStatus.READY and self.scraper is not None


class RetryScheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Awaitable[None]], *args: Any) -> None:
        ...


class AsyncioRetryScheduler:
    """Runs a coroutine function on the event loop after a delay in seconds."""

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    def call_later(self, delay: float, callback: Callable[..., Awaitable[None]], *args: Any) -> None:
        loop = asyncio.get_running_loop()
        loop.call_later(delay, self._spawn, callback, args)

    def _spawn(self, callback: Callable[..., Awaitable[None]], args: tuple) -> None:
        task = asyncio.ensure_future(callback(*args))
        # keep a reference until done, the loop only holds weak ones
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)


def default_options(proxy_url: Optional[str] = None) -> ScraperOptions:
    return ScraperOptions(
        headless=True,
        ignore_https_errors=True,
        block_resources=False,
        cache_size=1000,
        enable_gpu=False,
        proxy_url=proxy_url,
    )


def retry_delay_ms(retry_count: int) -> int:
    return INITIAL_RETRY_DELAY_MS * 2 ** retry_count


class ScraperManager:
    """Sole owner of ScraperState; everything else only reads readiness."""

    def __init__(
        self,
        options: Optional[ScraperOptions] = None,
        factory: Callable[[ScraperOptions], Any] = PlaywrightScraper,
        scheduler: Optional[RetryScheduler] = None,
    ):
        self.logger = get_logger("scraper_manager")
        self.options = options or default_options()
        self.factory = factory
        self.scheduler = scheduler or AsyncioRetryScheduler()
        self._state = ScraperState()
        self._start_task: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def status(self) -> ScraperStatus:
        return self._state.status

    @property
    def retry_count(self) -> int:
        return self._state.retry_count

    @property
    def is_ready(self) -> bool:
        return self._state.ready

    @property
    def scraper(self) -> Optional[Any]:
        """The live scraper, or None until initialization has succeeded."""
        return self._state.scraper if self._state.ready else None

    def start(self) -> asyncio.Task:
        """Kick off the first attempt without waiting for it."""
        if self._start_task is None:
            self._start_task = asyncio.ensure_future(self.initialize())
        return self._start_task

    async def initialize(self, retry_count: int = 0) -> None:
        if self._closed:
            return
        self._state.status = ScraperStatus.INITIALIZING
        self._state.retry_count = retry_count
        self.logger.info(
            f"Starting browser initialization (Attempt {retry_count + 1}/{MAX_RETRIES})..."
        )

        try:
            scraper = await self._create_scraper()
        except InitError as e:
            self.logger.error(f"Failed to initialize browser on attempt {retry_count + 1}: {e}")
            self._schedule_retry(retry_count)
            return

        if self._closed:
            # shut down while this attempt was in flight
            await self._discard(scraper)
            return

        self._state.scraper = scraper
        self._state.status = ScraperStatus.READY
        self.logger.info("Browser initialized successfully.")

    async def _create_scraper(self) -> Any:
        try:
            scraper = self.factory(self.options)
        except Exception as e:
            raise InitError(str(e) or e.__class__.__name__) from e
        try:
            await scraper.init()
        except Exception as e:
            await self._discard(scraper)
            raise InitError(str(e) or e.__class__.__name__) from e
        return scraper

    def _schedule_retry(self, retry_count: int) -> None:
        if self._closed:
            return
        if retry_count < MAX_RETRIES - 1:
            delay = retry_delay_ms(retry_count)
            self.logger.warning(f"Retrying in {delay / 1000:g} seconds...")
            self.scheduler.call_later(delay / 1000, self.initialize, retry_count + 1)
        else:
            self._state.status = ScraperStatus.FAILED
            self.logger.error(
                "Max retries reached. Browser initialization failed permanently for this session."
            )

    async def _discard(self, scraper: Any) -> None:
        try:
            await scraper.close()
        except Exception as e:
            self.logger.warning(f"Could not close failed browser instance: {e}")

    async def close(self) -> None:
        self._closed = True
        if self._state.status is not ScraperStatus.READY:
            self._state.status = ScraperStatus.FAILED
        scraper = self._state.scraper
        self._state.scraper = None
        if scraper is not None:
            await scraper.close()
