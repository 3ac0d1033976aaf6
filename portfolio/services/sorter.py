"""Blog ordering."""

from collections.abc import Iterable

from portfolio.models.records import BlogRecord


def sort_blogs(records: Iterable[BlogRecord]) -> list[BlogRecord]:
    """Return posts newest first. Stable, so equal dates keep file order."""
    return sorted(records, key=lambda r: r.published_at, reverse=True)
