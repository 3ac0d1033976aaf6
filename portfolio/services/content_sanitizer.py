"""Rich content HTML sanitization.

Record ``content`` fields are authored HTML that is inserted into detail
pages verbatim. This strips the handful of constructs that would execute
script in the reader's browser before the HTML is mounted. Attribute
rewrites only ever touch the inside of an opening tag, so prose such as
``only = TRUE`` passes through untouched.
"""

import re

_SCRIPT_BLOCK_RE = re.compile(
    r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL
)
_SCRIPT_TAG_RE = re.compile(r"</?script\b[^>]*>", re.IGNORECASE)
# An opening tag; quoted attribute values may contain '>'
_OPEN_TAG_RE = re.compile(r"""<[a-zA-Z](?:[^>"']|"[^"]*"|'[^']*')*>""")
_EVENT_HANDLER_RE = re.compile(
    r"""\s+on[a-z]+\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'>]+)""", re.IGNORECASE
)
_JS_URL_RE = re.compile(
    r"""((?:href|src|action|formaction)\s*=\s*["']?)\s*javascript:[^"'\s>]*""",
    re.IGNORECASE,
)


def _clean_tag(match: re.Match) -> str:
    tag = match.group(0)
    # onclick="...", onerror='...', onload=foo
    tag = _EVENT_HANDLER_RE.sub("", tag)
    # href="javascript:..." -> href="#"
    return _JS_URL_RE.sub(r"\g<1>#", tag)


def sanitize_content_html(html: str) -> str:
    """Remove script elements, inline event handlers and javascript: URLs."""
    # Whole <script>...</script> blocks, then any stray open/close tags
    html = _SCRIPT_BLOCK_RE.sub("", html)
    html = _SCRIPT_TAG_RE.sub("", html)

    return _OPEN_TAG_RE.sub(_clean_tag, html)
