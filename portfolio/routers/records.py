"""JSON endpoints exposing validated blog and project records."""

import logging

from fastapi import APIRouter, HTTPException, Path

from portfolio.models.records import (
    BlogIndex,
    BlogRecord,
    ProjectIndex,
    ProjectRecord,
    Record,
    RecordKind,
)
from portfolio.services.errors import EmptyError, PortfolioError, RecordNotFoundError
from portfolio.services.pipeline import load_records
from portfolio.services.resolver import find_by_slug

logger = logging.getLogger(__name__)

router = APIRouter(tags=["records"])


async def _load_or_502(kind: RecordKind) -> list[Record]:
    """Load records, treating an empty file as an empty list."""
    try:
        return await load_records(kind)
    except EmptyError:
        return []
    except PortfolioError as exc:
        logger.warning("Could not load %s records: %s", kind, exc)
        raise HTTPException(
            status_code=502, detail=f"Failed to load {kind} data"
        ) from exc


async def _get_by_slug(kind: RecordKind, slug: str) -> Record:
    records = await _load_or_502(kind)
    try:
        return find_by_slug(records, slug)
    except RecordNotFoundError as exc:
        raise HTTPException(
            status_code=404, detail=f"{kind.capitalize()} not found"
        ) from exc


@router.get("/blogs", response_model=BlogIndex)
async def list_blogs():
    """Get all valid blog posts, newest first."""
    posts = await _load_or_502(RecordKind.BLOG)
    return BlogIndex(posts=posts, total=len(posts))


@router.get("/blogs/{slug}", response_model=BlogRecord)
async def get_blog(slug: str = Path(..., max_length=200)):
    """Get a single blog post by its slug."""
    return await _get_by_slug(RecordKind.BLOG, slug)


@router.get("/projects", response_model=ProjectIndex)
async def list_projects():
    """Get all valid projects in file order."""
    projects = await _load_or_502(RecordKind.PROJECT)
    return ProjectIndex(projects=projects, total=len(projects))


@router.get("/projects/{slug}", response_model=ProjectRecord)
async def get_project(slug: str = Path(..., max_length=200)):
    """Get a single project by its slug."""
    return await _get_by_slug(RecordKind.PROJECT, slug)
