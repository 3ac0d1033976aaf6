"""Server-rendered portfolio pages."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from portfolio.models.records import RecordKind
from portfolio.services.pipeline import (
    PageResult,
    PageState,
    load_detail_page,
    load_list_page,
)
from portfolio.services.renderer import render_page

router = APIRouter(tags=["pages"])

_DETAIL_STATUS = {
    PageState.SUCCESS: 200,
    PageState.NOT_FOUND: 404,
    PageState.EMPTY: 404,
    PageState.FETCH_ERROR: 502,
    PageState.PARSE_ERROR: 502,
    PageState.FORMAT_ERROR: 502,
}


def _list_response(result: PageResult) -> HTMLResponse:
    # List pages always render; failures appear inline
    return HTMLResponse(content=render_page(result))


def _detail_response(result: PageResult) -> HTMLResponse:
    return HTMLResponse(
        content=render_page(result, detail=True),
        status_code=_DETAIL_STATUS[result.state],
    )


@router.get("/blogs.html", response_class=HTMLResponse)
async def blogs_page():
    """Blog list page."""
    return _list_response(await load_list_page(RecordKind.BLOG))


@router.get("/blog-detail.html", response_class=HTMLResponse)
async def blog_detail_page(request: Request):
    """Single blog article page, selected by ``?slug=``."""
    result = await load_detail_page(RecordKind.BLOG, request.query_params)
    return _detail_response(result)


@router.get("/projects.html", response_class=HTMLResponse)
async def projects_page():
    """Project list page."""
    return _list_response(await load_list_page(RecordKind.PROJECT))


@router.get("/project-detail.html", response_class=HTMLResponse)
async def project_detail_page(request: Request):
    """Single project case study page, selected by ``?slug=``."""
    result = await load_detail_page(RecordKind.PROJECT, request.query_params)
    return _detail_response(result)
