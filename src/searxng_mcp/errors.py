"""Error taxonomy shared by the tools and the dispatcher."""
from __future__ import annotations


class SearxngMCPError(Exception):
    """Base class for errors raised by the tool implementations."""


class ArgumentError(SearxngMCPError):
    """Tool arguments are missing or malformed."""


class UpstreamError(SearxngMCPError):
    """SearXNG answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason_phrase: str, body: str):
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.body = body
        super().__init__(f"SearXNG API error: {status_code} {reason_phrase}\n{body}")


class NotReadyError(SearxngMCPError):
    def __init__(self, message: str = "Puppeteer is not ready. Please try again in a few moments."):
        super().__init__(message)


class FetchError(SearxngMCPError):
    """The scraping backend produced no content for a URL."""


class InitError(SearxngMCPError):
    """The scraping backend could not be constructed or initialized."""
