"""HTML rendering for list and detail pages.

Consumes already-validated records (via PageResult) and never touches the
data host. Every piece of record text is escaped; rich ``content`` is
trusted authored HTML that only passes through ``sanitize_content_html``.
"""

import html
import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar
from urllib.parse import quote

from portfolio.config import get_settings
from portfolio.models.records import BlogRecord, ProjectRecord, RecordKind
from portfolio.services.content_sanitizer import sanitize_content_html
from portfolio.services.pipeline import PageResult, PageState

logger = logging.getLogger(__name__)

R = TypeVar("R")

_TITLE_RE = re.compile(r"(<title[^>]*>)(.*?)(</title>)", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class PageCopy:
    """Per-kind page names, container ids and user-facing strings."""

    list_page: str
    detail_page: str
    container_id: str
    detail_container_id: str
    list_title: str
    empty_message: str
    error_message: str
    error_hint: str
    not_found_title: str
    detail_error_title: str
    back_label: str
    content_placeholder: str
    detail_title_suffix: str


PAGE_COPY: dict[RecordKind, PageCopy] = {
    RecordKind.BLOG: PageCopy(
        list_page="blogs.html",
        detail_page="blog-detail.html",
        container_id="blogsContainer",
        detail_container_id="blogDetailContainer",
        list_title="Blogs",
        empty_message="Professional insights and articles are currently being prepared.",
        error_message="Unable to load analytical articles at this time.",
        error_hint="Analytical content will be available shortly.",
        not_found_title="Blog article not found",
        detail_error_title="Error loading article",
        back_label="Back to all blogs",
        content_placeholder="Full content coming soon...",
        detail_title_suffix="",
    ),
    RecordKind.PROJECT: PageCopy(
        list_page="projects.html",
        detail_page="project-detail.html",
        container_id="projectsContainer",
        detail_container_id="projectDetailContainer",
        list_title="Projects",
        empty_message="Analytical case studies are currently being prepared for review.",
        error_message="Unable to load project details at this time.",
        error_hint="Please try again later or contact for direct case examples.",
        not_found_title="Project not found",
        detail_error_title="Error loading project",
        back_label="Back to all projects",
        content_placeholder="Detailed case study coming soon...",
        detail_title_suffix=" Projects",
    ),
}


# ---------------------------------------------------------------------------
# Small helpers
# ---------------------------------------------------------------------------


def _e(value: str | None) -> str:
    return html.escape(value or "", quote=True)


def format_display_date(record: BlogRecord) -> str:
    """Format a post date like ``January 1, 2024``."""
    dt = record.published_at
    return f"{dt:%B} {dt.day}, {dt.year}"


def detail_href(kind: RecordKind, slug: str) -> str:
    return f"{PAGE_COPY[kind].detail_page}?slug={quote(slug, safe='')}"


def video_poster(media_path: str) -> str:
    """Derive a poster image path from a video path (``clip.mp4`` → ``clip.jpg``)."""
    return media_path.replace(".mp4", ".jpg", 1).replace(".webm", ".jpg", 1)


def _rich_content(content: str | None, placeholder: str) -> str:
    if content and content.strip():
        return sanitize_content_html(content)
    return f'<p class="text-center py-8 text-gray-500">{_e(placeholder)}</p>'


# ---------------------------------------------------------------------------
# Cards (list pages)
# ---------------------------------------------------------------------------


def render_blog_card(blog: BlogRecord) -> str:
    """Render one post as a list card."""
    category = ""
    if blog.category and blog.category.strip():
        category = (
            '<span class="inline-block px-3 py-1 bg-blue-50 text-blue-700 '
            f'text-xs font-medium rounded-full mb-3">{_e(blog.category)}</span>'
        )

    read_link = ""
    if blog.slug:
        read_link = (
            '<div class="mt-6 pt-4 border-t border-gray-100">'
            f'<a class="text-blue-700 hover:text-blue-900 font-medium" '
            f'href="{_e(detail_href(RecordKind.BLOG, blog.slug))}">'
            'Read Analysis<span class="ml-2">→</span></a></div>'
        )

    return (
        '<article class="bg-white p-8 rounded-lg shadow-sm border border-gray-200 '
        'flex flex-col h-full">'
        f'<div class="mb-4">{category}'
        f'<h3 class="text-xl font-semibold text-gray-900 mb-3">{_e(blog.title)}</h3>'
        f'<time class="text-gray-600 text-sm" datetime="{blog.published_at.isoformat()}">'
        f"{format_display_date(blog)}</time></div>"
        f'<div class="mt-4 flex-grow"><p class="text-gray-700 leading-relaxed">'
        f"{_e(blog.summary)}</p></div>"
        f"{read_link}"
        "</article>"
    )


def _project_card_media(project: ProjectRecord) -> str:
    if project.media_type == "image":
        element = (
            f'<img class="w-full h-48 object-cover" src="{_e(project.media_path)}" '
            f'alt="{_e(project.title)} - Analytical Output" '
            'loading="lazy" decoding="async">'
        )
    else:
        element = (
            f'<video class="w-full h-48 object-cover" src="{_e(project.media_path)}" '
            f'poster="{_e(video_poster(project.media_path))}" '
            "controls muted playsinline preload=\"metadata\" "
            'controlslist="nofullscreen nodownload noremoteplayback noplaybackrate" '
            "disablepictureinpicture disableremoteplayback></video>"
        )
    return f'<div class="bg-gray-100 overflow-hidden">{element}</div>'


def render_project_card(project: ProjectRecord) -> str:
    """Render one project as a list card."""
    media = _project_card_media(project) if project.has_media else ""

    tools = ""
    if project.tools:
        badges = "".join(
            '<span class="px-3 py-1 bg-blue-50 text-blue-700 text-xs font-medium '
            f'rounded-full">{_e(tool)}</span>'
            for tool in project.tools
        )
        tools = (
            '<div class="mb-6"><h4 class="font-medium text-gray-900 mb-2">'
            f'Tools &amp; Techniques</h4><div class="flex flex-wrap gap-2">{badges}</div></div>'
        )

    case_study = ""
    if project.slug:
        case_study = (
            '<a class="inline-flex items-center text-blue-700 hover:text-blue-900 '
            f'font-medium mt-2" href="{_e(detail_href(RecordKind.PROJECT, project.slug))}">'
            'View Case Study<span class="ml-2">→</span></a>'
        )

    return (
        '<article class="bg-white rounded-lg shadow-sm border border-gray-200 '
        'overflow-hidden flex flex-col h-full">'
        f"{media}"
        '<div class="p-8 flex-grow flex flex-col">'
        f'<h3 class="text-xl font-semibold text-blue-800 mb-4">{_e(project.title)}</h3>'
        f'<p class="text-gray-700 mb-6 flex-grow">{_e(project.description)}</p>'
        f"{tools}{case_study}"
        "</div></article>"
    )


def render_cards(records: Iterable[R], render_one: Callable[[R], str]) -> list[str]:
    """Render each record, skipping (and logging) any that fail to build.

    One bad record must not blank the whole page.
    """
    cards = []
    for record in records:
        try:
            cards.append(render_one(record))
        except Exception:
            logger.exception(
                "Error rendering card for %r", getattr(record, "slug", None)
            )
    return cards


# ---------------------------------------------------------------------------
# Detail articles
# ---------------------------------------------------------------------------


def _back_link(copy: PageCopy) -> str:
    return (
        '<div class="mb-8"><a href="'
        f'{copy.list_page}" class="inline-flex items-center text-blue-700 '
        f'hover:text-blue-900 font-medium">← {_e(copy.back_label)}</a></div>'
    )


def render_blog_detail(blog: BlogRecord) -> str:
    """Render the full article for one post."""
    copy = PAGE_COPY[RecordKind.BLOG]

    category = ""
    if blog.category:
        category = (
            '<span class="inline-block px-4 py-2 bg-blue-100 text-blue-800 '
            f'rounded-full text-sm font-medium mb-4">{_e(blog.category)}</span>'
        )

    media = ""
    if blog.has_media and blog.media_type == "image":
        media = (
            '<div class="mb-8 rounded-lg overflow-hidden shadow-lg">'
            f'<img src="{_e(blog.media_path)}" alt="{_e(blog.title)}" '
            'class="w-full h-auto" loading="lazy"></div>'
        )
    elif blog.has_media:
        media = (
            '<div class="mb-8 rounded-lg overflow-hidden shadow-lg">'
            f'<video controls class="w-full h-auto" '
            f'poster="{_e(video_poster(blog.media_path))}">'
            f'<source src="{_e(blog.media_path)}" type="video/mp4">'
            "Your browser does not support the video tag.</video></div>"
        )

    return (
        '<article class="bg-white rounded-lg p-6 md:p-8 lg:p-10">'
        f"{_back_link(copy)}{category}"
        f'<h1 class="text-3xl md:text-4xl font-bold text-gray-900 mb-4 mt-2">{_e(blog.title)}</h1>'
        '<div class="flex items-center text-gray-600 mb-8">'
        f'<time datetime="{_e(blog.date)}">{format_display_date(blog)}</time></div>'
        f"{media}"
        '<div class="bg-blue-50 border-l-4 border-blue-500 p-6 mb-8 rounded-r-lg">'
        f'<p class="text-lg text-gray-700 italic">{_e(blog.summary)}</p></div>'
        '<div class="blog-content text-gray-700 leading-relaxed space-y-6 text-lg">'
        f"{_rich_content(blog.content, copy.content_placeholder)}</div>"
        '<div class="mt-12 pt-8 border-t border-gray-200 flex justify-between">'
        f'<a href="{copy.list_page}" class="text-blue-700 hover:text-blue-900 font-medium">All Blogs</a>'
        '<a href="contact.html" class="text-blue-700 hover:text-blue-900 font-medium">Contact Me →</a>'
        "</div></article>"
    )


def render_project_detail(project: ProjectRecord) -> str:
    """Render the full case study for one project."""
    copy = PAGE_COPY[RecordKind.PROJECT]

    media = ""
    if project.has_media and project.media_type == "image":
        media = (
            '<div class="mb-8 rounded-lg overflow-hidden shadow-xl border border-gray-200">'
            f'<img src="{_e(project.media_path)}" alt="{_e(project.title)}" '
            'class="w-full h-auto object-contain bg-white p-4" loading="lazy">'
            '<p class="text-center text-gray-500 text-sm p-2 bg-gray-50">Project Screenshot</p>'
            "</div>"
        )
    elif project.has_media:
        media = (
            '<div class="mb-8 bg-black rounded-lg overflow-hidden shadow-xl">'
            f'<video src="{_e(project.media_path)}" controls playsinline preload="metadata" '
            'controlslist="nofullscreen nodownload noremoteplayback" '
            'disablepictureinpicture disableremoteplayback class="w-full h-full"></video>'
            "</div>"
            '<div class="mb-4 text-center"><p class="text-gray-600 text-sm">'
            "Click the play button above to view the project demonstration</p></div>"
        )

    badges = " ".join(
        '<span class="px-3 py-1 bg-blue-100 text-blue-800 text-sm font-medium '
        f'rounded-full">{_e(tool)}</span>'
        for tool in project.tools
    )

    return (
        '<article class="bg-white rounded-lg p-6 md:p-8 lg:p-10 shadow-lg">'
        f"{_back_link(copy)}"
        f'<h1 class="text-3xl md:text-4xl font-bold text-gray-900 mb-4">{_e(project.title)}</h1>'
        '<div class="bg-gray-50 border-l-4 border-blue-500 p-6 mb-8 rounded-r-lg">'
        f'<p class="text-lg text-gray-700">{_e(project.description)}</p></div>'
        f"{media}"
        '<div class="project-content text-gray-700 leading-relaxed space-y-6 text-lg mb-8">'
        f"{_rich_content(project.content, copy.content_placeholder)}</div>"
        '<div class="mb-8"><h3 class="text-xl font-bold text-gray-900 mb-4">'
        "Tools &amp; Technologies Used</h3>"
        f'<div class="flex flex-wrap gap-2 mb-6">{badges}</div></div>'
        '<div class="bg-blue-50 p-6 rounded-lg mb-8">'
        '<h3 class="text-lg font-semibold text-gray-900 mb-3">Project Repository</h3>'
        f'<a href="{_e(project.github)}" target="_blank" rel="noopener noreferrer" '
        'class="inline-flex items-center bg-gray-900 text-white px-6 py-3 rounded-lg font-medium">'
        "View on GitHub</a>"
        '<p class="text-gray-600 text-sm mt-2">(Opens in new tab)</p></div>'
        '<div class="mt-12 pt-8 border-t border-gray-200 flex justify-between">'
        f'<a href="{copy.list_page}" class="text-blue-700 hover:text-blue-900 font-medium">All Projects</a>'
        '<a href="contact.html" class="text-blue-700 hover:text-blue-900 font-medium">'
        "Request Similar Project →</a>"
        "</div></article>"
    )


CARD_RENDERERS: dict[RecordKind, Callable] = {
    RecordKind.BLOG: render_blog_card,
    RecordKind.PROJECT: render_project_card,
}

DETAIL_RENDERERS: dict[RecordKind, Callable] = {
    RecordKind.BLOG: render_blog_detail,
    RecordKind.PROJECT: render_project_detail,
}


# ---------------------------------------------------------------------------
# Page shell and mounting
# ---------------------------------------------------------------------------


def default_shell(title: str, container_id: str) -> str:
    """Minimal HTML5 document with an empty container element."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1" />
<title>{_e(title)}</title>
</head>
<body>
<main class="container mx-auto px-4 py-12">
<div id="{container_id}"></div>
</main>
</body>
</html>"""


def load_shell(page: str, title: str, container_id: str) -> str:
    """Return the page shell from ``site_dir`` if present, else the default."""
    site_dir = get_settings().site_dir
    if site_dir:
        path = Path(site_dir) / page
        if path.is_file():
            return path.read_text(encoding="utf-8")
    return default_shell(title, container_id)


def set_title(shell: str, title: str) -> str:
    """Replace the document <title>, if the shell has one."""
    return _TITLE_RE.sub(
        lambda m: f"{m.group(1)}{_e(title)}{m.group(3)}", shell, count=1
    )


def mount(shell: str, container_id: str, fragment: str) -> str:
    """Replace the inner HTML of the element with ``id=container_id``.

    A shell without that element is left untouched (logged, not raised).
    """
    open_re = re.compile(
        rf"""<([a-zA-Z][a-zA-Z0-9-]*)\b[^>]*(?<![\w-])id\s*=\s*["']{re.escape(container_id)}["'][^>]*>"""
    )
    opening = open_re.search(shell)
    if not opening:
        logger.warning("Container element with ID %r not found", container_id)
        return shell

    tag = opening.group(1)
    tag_re = re.compile(rf"<(/?){tag}\b[^>]*>", re.IGNORECASE)
    depth = 1
    for match in tag_re.finditer(shell, opening.end()):
        if match.group(1):
            depth -= 1
        elif not match.group(0).endswith("/>"):
            depth += 1
        if depth == 0:
            return shell[: opening.end()] + fragment + shell[match.start():]

    logger.warning("Container element %r is never closed", container_id)
    return shell


# ---------------------------------------------------------------------------
# State-driven page rendering
# ---------------------------------------------------------------------------


def _message(heading: str, text: str, link_href: str, link_label: str) -> str:
    parts = ['<div class="text-center py-12 text-gray-500 col-span-full">']
    if heading:
        parts.append(f'<h2 class="text-2xl text-gray-700 mb-4">{_e(heading)}</h2>')
    if text:
        parts.append(f'<p class="mb-4">{_e(text)}</p>')
    parts.append(
        f'<a href="{link_href}" class="text-blue-700 hover:text-blue-900">'
        f"← {_e(link_label)}</a></div>"
    )
    return "".join(parts)


def render_state_body(result: PageResult, *, detail: bool = False) -> str:
    """Map a page result to the HTML that goes inside the page container."""
    copy = PAGE_COPY[result.kind]
    state = result.state

    if state is PageState.SUCCESS and detail and result.record is not None:
        try:
            return DETAIL_RENDERERS[result.kind](result.record)
        except Exception:
            logger.exception("Error rendering %s detail", result.kind)
            return _message(copy.detail_error_title, "", copy.list_page, copy.back_label)

    if state is PageState.SUCCESS and not detail:
        cards = render_cards(result.records, CARD_RENDERERS[result.kind])
        if cards:
            return "".join(cards)
        return _message("", copy.empty_message, copy.list_page, copy.back_label)

    if state is PageState.NOT_FOUND or (detail and state is PageState.EMPTY):
        return _message(copy.not_found_title, "", copy.list_page, copy.back_label)

    if state is PageState.EMPTY:
        return _message("", copy.empty_message, copy.list_page, copy.back_label)

    # fetch_error, parse_error, format_error
    if detail:
        return _message(
            copy.detail_error_title,
            "Please check your internet connection",
            copy.list_page,
            copy.back_label,
        )
    return _message(
        copy.error_message, copy.error_hint, copy.list_page, "Try again"
    )


def page_title(result: PageResult, *, detail: bool = False) -> str:
    site_name = get_settings().site_name
    copy = PAGE_COPY[result.kind]
    if detail and result.state is PageState.SUCCESS and result.record is not None:
        return f"{result.record.title} | {site_name}{copy.detail_title_suffix}"
    return f"{copy.list_title} | {site_name}"


def render_page(result: PageResult, *, detail: bool = False) -> str:
    """Render the complete HTML document for a page result."""
    copy = PAGE_COPY[result.kind]
    if detail:
        page, container_id = copy.detail_page, copy.detail_container_id
    else:
        page, container_id = copy.list_page, copy.container_id

    title = page_title(result, detail=detail)
    shell = load_shell(page, title, container_id)
    if detail and result.state is PageState.SUCCESS:
        shell = set_title(shell, title)
    return mount(shell, container_id, render_state_body(result, detail=detail))
