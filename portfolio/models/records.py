"""Blog post and project record models."""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    field_validator,
    model_validator,
)

NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]

MEDIA_TYPES = ("image", "video")


class RecordKind(StrEnum):
    BLOG = "blog"
    PROJECT = "project"


def parse_record_date(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime string into an aware datetime.

    Accepts a trailing ``Z``. Naive values (including bare dates) are taken
    as UTC. Raises ValueError when the string cannot be parsed.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    slug: StrictStr | None = None
    title: NonEmptyStr
    media_path: StrictStr | None = Field(default=None, alias="mediaPath")
    content: StrictStr | None = None

    @field_validator("slug", "media_path", "content", mode="before")
    @classmethod
    def non_string_is_unset(cls, v: object) -> object:
        return v if isinstance(v, str) else None

    @property
    def has_media(self) -> bool:
        return self.media_type in MEDIA_TYPES and bool(self.media_path)


class BlogRecord(_Record):
    """A blog post as stored in data/blogs.json."""

    date: NonEmptyStr
    summary: NonEmptyStr
    category: StrictStr | None = None
    # Unknown media types are tolerated on posts; they simply don't render.
    media_type: StrictStr | None = Field(default=None, alias="mediaType")

    @field_validator("category", "media_type", mode="before")
    @classmethod
    def optional_text_is_lenient(cls, v: object) -> object:
        return v if isinstance(v, str) else None

    @field_validator("date")
    @classmethod
    def date_must_parse(cls, v: str) -> str:
        try:
            parse_record_date(v)
        except ValueError as exc:
            raise ValueError(f"unparsable date {v!r}") from exc
        return v

    @property
    def published_at(self) -> datetime:
        return parse_record_date(self.date)


class ProjectRecord(_Record):
    """A project case study as stored in data/projects.json."""

    description: NonEmptyStr
    tools: list[str]
    github: NonEmptyStr
    media_type: Literal["image", "video"] | None = Field(
        default=None, alias="mediaType"
    )

    @field_validator("tools", mode="before")
    @classmethod
    def tools_must_be_array(cls, v: object) -> list[str]:
        """Require an array; drop entries that aren't non-blank strings."""
        if not isinstance(v, list):
            raise ValueError("tools must be an array")
        return [t for t in v if isinstance(t, str) and t.strip()]

    @field_validator("media_type", mode="before")
    @classmethod
    def blank_media_type_is_unset(cls, v: object) -> object:
        return v or None

    @model_validator(mode="after")
    def media_path_required_with_type(self) -> "ProjectRecord":
        if self.media_type and not self.media_path:
            raise ValueError("mediaPath is required when mediaType is set")
        return self


Record = BlogRecord | ProjectRecord

MODEL_FOR_KIND: dict[RecordKind, type[BlogRecord] | type[ProjectRecord]] = {
    RecordKind.BLOG: BlogRecord,
    RecordKind.PROJECT: ProjectRecord,
}


class BlogIndex(BaseModel):
    """Validated blog posts, newest first."""

    posts: list[BlogRecord]
    total: int


class ProjectIndex(BaseModel):
    """Validated projects in file order."""

    projects: list[ProjectRecord]
    total: int
