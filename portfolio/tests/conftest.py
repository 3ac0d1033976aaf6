"""Shared fixtures for portfolio tests."""

import httpx
import pytest


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset all module-level singletons between tests."""
    yield

    # 1. Settings LRU cache
    from portfolio.config import get_settings

    get_settings.cache_clear()

    # 2. HTTP client singleton
    import portfolio.services.http_client as http_mod

    http_mod._client = None


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from portfolio.config import Settings, get_settings

    test_settings = Settings(
        data_base_url="http://data.test/",
        blogs_path="data/blogs.json",
        projects_path="data/projects.json",
        site_name="Test Analyst",
        site_dir="",
    )

    get_settings.cache_clear()
    monkeypatch.setattr("portfolio.config.get_settings", lambda: test_settings)

    # Patch get_settings in all modules that import it directly
    # (from portfolio.config import get_settings creates a local binding that
    # the portfolio.config monkeypatch above does not affect)
    for mod_path in [
        "portfolio.services.http_client",
        "portfolio.services.fetcher",
        "portfolio.services.renderer",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


class FakeDataHost:
    """Canned responses for the static data host, served via httpx.MockTransport.

    Unrouted paths return 404. Every requested path is recorded in
    ``requests`` so tests can assert on fetch counts.
    """

    def __init__(self) -> None:
        self.routes: dict = {}
        self.requests: list[str] = []

    def serve_json(self, path: str, payload) -> None:
        self.routes[path] = lambda request: httpx.Response(200, json=payload)

    def serve_text(self, path: str, text: str, status: int = 200) -> None:
        self.routes[path] = lambda request: httpx.Response(status, text=text)

    def redirect(self, path: str, location: str, status: int = 301) -> None:
        self.routes[path] = lambda request: httpx.Response(
            status, headers={"Location": location}
        )

    def fail(self, path: str) -> None:
        def _raise(request):
            raise httpx.ConnectError("connection refused", request=request)

        self.routes[path] = _raise

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.lstrip("/")
        self.requests.append(path)
        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, text="Not Found")
        return route(request)


@pytest.fixture
def data_host(mock_settings):
    """Install a FakeDataHost behind the shared HTTP client."""
    import portfolio.services.http_client as http_mod

    host = FakeDataHost()
    http_mod._client = httpx.AsyncClient(
        transport=httpx.MockTransport(host.handler),
        base_url=mock_settings.data_base_url,
        follow_redirects=True,
    )
    return host


@pytest.fixture
def sample_blogs() -> list[dict]:
    return [
        {
            "slug": "requirements-elicitation",
            "title": "Requirements Elicitation in Practice",
            "date": "2024-01-01",
            "summary": "Interview techniques that surface hidden needs.",
            "category": "Process",
        },
        {
            "slug": "dashboards-that-matter",
            "title": "Dashboards That Matter",
            "date": "2024-06-01",
            "summary": "Choosing KPIs stakeholders actually read.",
            "category": "Analytics",
            "mediaType": "image",
            "mediaPath": "images/dashboards.png",
            "content": "<p>Start from the decision, not the data.</p>",
        },
        {
            "slug": "broken-date",
            "title": "Broken",
            "date": "sometime last spring",
            "summary": "Should never render.",
        },
    ]


@pytest.fixture
def sample_projects() -> list[dict]:
    return [
        {
            "slug": "churn-analysis",
            "title": "Customer Churn Analysis",
            "description": "Segmenting at-risk subscribers.",
            "tools": ["SQL", "Power BI"],
            "github": "https://github.com/example/churn-analysis",
            "mediaType": "video",
            "mediaPath": "videos/churn.mp4",
        },
        {
            "slug": "process-mapping",
            "title": "Order-to-Cash Process Mapping",
            "description": "BPMN models of the fulfilment flow.",
            "tools": [],
            "github": "https://github.com/example/o2c",
        },
        {
            "slug": "no-github",
            "title": "Missing Repo",
            "description": "Fails validation.",
            "tools": ["Excel"],
        },
    ]
