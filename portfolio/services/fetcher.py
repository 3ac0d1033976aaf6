"""Fetch record data files from the static data host."""

import json
import logging
from typing import Any

import httpx

from portfolio.config import get_settings
from portfolio.models.records import RecordKind
from portfolio.services.errors import FetchError, ParseError
from portfolio.services.http_client import get_shared_client

logger = logging.getLogger(__name__)


def data_path_for(kind: RecordKind) -> str:
    """Return the configured data file path for a record kind."""
    settings = get_settings()
    if kind is RecordKind.BLOG:
        return settings.blogs_path
    return settings.projects_path


async def fetch_json(path: str) -> Any:
    """GET a JSON document relative to the data host and decode it.

    Every call goes to the network; nothing is cached or retried.

    Raises:
        FetchError: transport failure, or a non-2xx response (``status`` set).
        ParseError: the body is not valid JSON.
    """
    client = get_shared_client()
    try:
        resp = await client.get(path)
    except httpx.HTTPError as exc:
        logger.debug("Fetch of %s failed: %s", path, exc)
        raise FetchError(f"Could not fetch {path}: {exc}") from exc

    if not resp.is_success:
        logger.debug("Fetch of %s returned HTTP %d", path, resp.status_code)
        raise FetchError(
            f"HTTP {resp.status_code} fetching {path}", status=resp.status_code
        )

    try:
        return resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.debug("Malformed JSON in %s: %s", path, exc)
        raise ParseError(f"Malformed JSON in {path}") from exc
