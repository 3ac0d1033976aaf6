"""
Portfolio Site

Thin FastAPI app rendering blog and project pages from static JSON data.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portfolio.config import get_settings
from portfolio.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from portfolio.routers import pages, records
from portfolio.services.http_client import close_shared_client

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    yield
    await close_shared_client()


app = FastAPI(
    title="Portfolio Site",
    description="Blog posts and project case studies rendered from static JSON",
    version="0.1.0",
    lifespan=lifespan,
)

# Request ID and response headers
app.add_middleware(RequestIDMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

# Routers
app.include_router(records.router, prefix="/api/portfolio")
app.include_router(pages.router)


def _check_config() -> str:
    """Verify the data host and data paths are configured. Returns 'ok' or 'fail'."""
    s = get_settings()
    if s.data_base_url and s.blogs_path and s.projects_path:
        return "ok"
    return "fail"


@app.get("/api/portfolio/health")
async def health_check() -> JSONResponse:
    """Liveness check plus a configuration sanity check."""
    checks = {"config": _check_config()}
    failed = [k for k, v in checks.items() if v != "ok"]
    if failed:
        logger.warning("Health check degraded, failed: %s", ", ".join(failed))

    result: dict[str, Any] = {
        "status": "degraded" if failed else "ok",
        "service": "portfolio-site",
        "version": "0.1.0",
        "checks": checks,
    }
    return JSONResponse(content=result)
