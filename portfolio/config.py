"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"
    site_name: str = "Business Analyst"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Static data host (serves data/blogs.json and data/projects.json)
    data_base_url: str = "http://localhost:8080/"
    blogs_path: str = "data/blogs.json"
    projects_path: str = "data/projects.json"
    fetch_timeout: float | None = None  # None = wait indefinitely

    # Optional directory of page shells (blogs.html, blog-detail.html, ...)
    site_dir: str = ""

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
