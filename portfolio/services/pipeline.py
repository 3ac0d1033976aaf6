"""Page data pipeline: fetch → validate → sort/resolve.

Produces a PageResult describing what a page should show. Contains no
HTML; rendering happens separately in ``renderer.render_page``.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from portfolio.middleware import request_id_var
from portfolio.models.records import Record, RecordKind
from portfolio.services.errors import (
    EmptyError,
    FetchError,
    FormatError,
    NotFoundError,
    ParseError,
    PortfolioError,
)
from portfolio.services.fetcher import data_path_for, fetch_json
from portfolio.services.resolver import find_by_slug, read_slug
from portfolio.services.sorter import sort_blogs
from portfolio.services.validator import validate_records

logger = logging.getLogger(__name__)


class PageState(StrEnum):
    SUCCESS = "success"
    FETCH_ERROR = "fetch_error"
    PARSE_ERROR = "parse_error"
    FORMAT_ERROR = "format_error"
    EMPTY = "empty"
    NOT_FOUND = "not_found"


@dataclass
class PageResult:
    """Terminal state of one page load."""

    kind: RecordKind
    state: PageState
    records: list[Record] = field(default_factory=list)
    record: Record | None = None
    error: PortfolioError | None = None


_ERROR_STATES: list[tuple[type[PortfolioError], PageState]] = [
    (FetchError, PageState.FETCH_ERROR),
    (ParseError, PageState.PARSE_ERROR),
    (FormatError, PageState.FORMAT_ERROR),
    (EmptyError, PageState.EMPTY),
    (NotFoundError, PageState.NOT_FOUND),
]


def state_for_error(exc: PortfolioError) -> PageState:
    """Map a pipeline error to the page state it produces."""
    for exc_type, state in _ERROR_STATES:
        if isinstance(exc, exc_type):
            return state
    raise TypeError(f"Unmapped pipeline error: {type(exc).__name__}")


async def load_records(kind: RecordKind, *, sort: bool = True) -> list[Record]:
    """Fetch and validate all records of *kind*.

    Blogs come back newest first unless *sort* is False.
    Raises FetchError, ParseError, FormatError or EmptyError.
    """
    data = await fetch_json(data_path_for(kind))
    records = validate_records(data, kind)
    if not records:
        raise EmptyError(f"No valid {kind} records")
    if sort and kind is RecordKind.BLOG:
        records = sort_blogs(records)
    return records


async def load_list_page(kind: RecordKind) -> PageResult:
    """Run the list page pipeline for *kind*."""
    try:
        records = await load_records(kind)
    except PortfolioError as exc:
        state = state_for_error(exc)
        logger.warning(
            "%s list page ended in %s: %s [request %s]",
            kind,
            state,
            exc,
            request_id_var.get() or "-",
        )
        return PageResult(kind=kind, state=state, error=exc)

    logger.info("Loaded %d %s records", len(records), kind)
    return PageResult(kind=kind, state=PageState.SUCCESS, records=records)


async def load_detail_page(kind: RecordKind, query: Mapping[str, str]) -> PageResult:
    """Run the detail page pipeline for *kind*, selecting by ``query["slug"]``.

    A missing slug short-circuits to NOT_FOUND without fetching.
    """
    try:
        slug = read_slug(query)
        try:
            records = await load_records(kind, sort=False)
        except EmptyError:
            records = []
        record = find_by_slug(records, slug)
    except PortfolioError as exc:
        state = state_for_error(exc)
        logger.warning(
            "%s detail page ended in %s: %s [request %s]",
            kind,
            state,
            exc,
            request_id_var.get() or "-",
        )
        return PageResult(kind=kind, state=state, error=exc)

    return PageResult(kind=kind, state=PageState.SUCCESS, record=record)
