import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from searxng_mcp.utils.logger import get_logger


DEFAULT_SEARXNG_URL = "http://localhost:8080"
DEFAULT_FETCH_TIMEOUT = 10.0


@dataclass
class Settings:
    searxng_url: str
    search_timeout: Optional[float]
    fetch_timeout: float
    proxy_url: Optional[str]


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        get_logger("config").warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    if value <= 0:
        get_logger("config").warning(f"Ignoring non-positive {name}={raw!r}, using {default}")
        return default
    return value


def load_settings() -> Settings:
    load_dotenv()
    searxng_url = os.getenv("SEARXNG_URL", "").strip() or DEFAULT_SEARXNG_URL

    # No explicit search timeout unless configured; httpx applies its own default
    search_timeout = _float_env("SEARCH_TIMEOUT", None)
    fetch_timeout = _float_env("FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT)
    proxy_url = os.getenv("PROXY_URL", "").strip() or None

    return Settings(
        searxng_url=searxng_url,
        search_timeout=search_timeout,
        fetch_timeout=fetch_timeout,  # type: ignore[arg-type]
        proxy_url=proxy_url,
    )
