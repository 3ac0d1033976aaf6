"""Shared httpx client for the static data host."""

import logging

import httpx

from portfolio.config import get_settings

logger = logging.getLogger(__name__)

# Module-level shared client (created lazily, lives for the process lifetime)
_client: httpx.AsyncClient | None = None


def get_shared_client() -> httpx.AsyncClient:
    """Return a shared httpx.AsyncClient bound to the data host, creating it on first call."""
    global _client
    if _client is None or _client.is_closed:
        settings = get_settings()
        _client = httpx.AsyncClient(
            base_url=settings.data_base_url,
            timeout=settings.fetch_timeout,
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )
    return _client


async def close_shared_client() -> None:
    """Close the shared client if one was created."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        logger.info("Closed shared HTTP client")
    _client = None
