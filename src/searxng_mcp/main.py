"""searxng-mcp entrypoint
Runs the MCP server on stdio. Configuration comes from the environment / .env
(SEARXNG_URL, SEARCH_TIMEOUT, FETCH_TIMEOUT, PROXY_URL, LOG_LEVEL).
"""
from __future__ import annotations

import asyncio
import logging
import os
import sys
from types import TracebackType
from typing import Any, Dict, Optional, Type

from searxng_mcp.server.mcp_server import serve
from searxng_mcp.utils.config import load_settings
from searxng_mcp.utils.logger import get_logger


logger = get_logger("main")


def _fatal_exit() -> None:
    logging.shutdown()
    os._exit(1)


def _handle_uncaught(
    exc_type: Type[BaseException],
    exc: BaseException,
    tb: Optional[TracebackType],
) -> None:
    logger.critical("Uncaught exception", exc_info=(exc_type, exc, tb))
    _fatal_exit()


def _handle_loop_exception(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
    """Any exception nobody awaited is treated as fatal, like an uncaught one."""
    exc = context.get("exception")
    message = context.get("message", "Unhandled exception in event loop")
    if exc is not None:
        logger.critical(f"Unhandled task exception: {message}", exc_info=exc)
    else:
        logger.critical(f"Unhandled task exception: {message}")
    _fatal_exit()


async def _run() -> None:
    asyncio.get_running_loop().set_exception_handler(_handle_loop_exception)
    await serve(load_settings())


def main() -> None:
    logger.info("searxng-mcp: Starting up...")
    sys.excepthook = _handle_uncaught
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        logger.info("searxng-mcp: Interrupted, shutting down")
    except Exception:
        logger.exception("searxng-mcp: Fatal error running server")
        sys.exit(1)


if __name__ == "__main__":
    main()
