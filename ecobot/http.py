"""
Shared async HTTP client for the upstream collaborators.

Opened once in the app lifespan and closed on shutdown, the same way a
connection pool is managed. Outside the app (scripts, tests) the first call
to get_http() creates one lazily.
"""
import logging

import httpx

logger = logging.getLogger("ecobot-api")

_client: httpx.AsyncClient | None = None


def init_http() -> httpx.AsyncClient:
    """Create the pooled client. Safe to call twice."""
    global _client
    if _client is None:
        _client = httpx.AsyncClient(follow_redirects=True)
        logger.info("Upstream HTTP client opened")
    return _client


async def close_http() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
        logger.info("Upstream HTTP client closed")


def get_http() -> httpx.AsyncClient:
    return init_http()
