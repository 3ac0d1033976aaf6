"""Detail page lookup by slug."""

from collections.abc import Iterable, Mapping
from typing import TypeVar

from portfolio.services.errors import RecordNotFoundError, SlugNotSpecifiedError

SLUG_PARAM = "slug"

R = TypeVar("R")


def read_slug(query: Mapping[str, str]) -> str:
    """Return the ``slug`` query parameter, or raise SlugNotSpecifiedError.

    When the parameter is repeated, the first occurrence wins.
    """
    if hasattr(query, "getlist"):
        values = query.getlist(SLUG_PARAM)
        slug = values[0] if values else None
    else:
        slug = query.get(SLUG_PARAM)
    if not slug:
        raise SlugNotSpecifiedError("No slug specified")
    return slug


def find_by_slug(records: Iterable[R], slug: str) -> R:
    """Linear scan for the first record whose slug equals *slug* exactly."""
    for record in records:
        if getattr(record, "slug", None) == slug:
            return record
    raise RecordNotFoundError(slug)
