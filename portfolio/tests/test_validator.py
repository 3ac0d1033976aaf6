"""Tests for record models and the batch validator."""

import logging
from datetime import datetime, timezone

import pytest

from portfolio.models.records import BlogRecord, ProjectRecord, RecordKind
from portfolio.services.errors import FormatError
from portfolio.services.validator import check_record, validate_records


def _blog(**overrides) -> dict:
    data = {"slug": "a", "title": "A", "date": "2024-01-01", "summary": "s"}
    data.update(overrides)
    return data


def _project(**overrides) -> dict:
    data = {
        "slug": "p",
        "title": "P",
        "description": "d",
        "tools": [],
        "github": "https://github.com/example/p",
    }
    data.update(overrides)
    return data


class TestBlogRecord:
    def test_accepts_minimal_post(self):
        check = check_record(_blog(), RecordKind.BLOG)
        assert check.ok
        assert isinstance(check.record, BlogRecord)

    @pytest.mark.parametrize("field", ["title", "date", "summary"])
    def test_rejects_missing_required_field(self, field):
        data = _blog()
        del data[field]
        check = check_record(data, RecordKind.BLOG)
        assert not check.ok
        assert any(e.startswith(field) for e in check.errors)

    @pytest.mark.parametrize("field", ["title", "date", "summary"])
    def test_rejects_empty_required_field(self, field):
        assert not check_record(_blog(**{field: ""}), RecordKind.BLOG).ok

    def test_rejects_non_string_title(self):
        assert not check_record(_blog(title=42), RecordKind.BLOG).ok

    @pytest.mark.parametrize(
        "bad_date", ["not a date", "2024-13-45", "31/12/2024", "yesterday"]
    )
    def test_rejects_unparsable_date(self, bad_date):
        check = check_record(_blog(date=bad_date), RecordKind.BLOG)
        assert not check.ok
        assert any(e.startswith("date") for e in check.errors)

    def test_unparsable_date_excluded_even_when_otherwise_complete(self):
        data = _blog(
            date="June 2024-ish",
            category="Analytics",
            mediaType="image",
            mediaPath="images/x.png",
            content="<p>Body</p>",
        )
        assert validate_records([data], RecordKind.BLOG) == []

    def test_parses_datetime_with_z_suffix(self):
        record = check_record(
            _blog(date="2024-06-01T10:30:00Z"), RecordKind.BLOG
        ).record
        assert record.published_at == datetime(
            2024, 6, 1, 10, 30, tzinfo=timezone.utc
        )

    def test_bare_date_is_midnight_utc(self):
        record = check_record(_blog(), RecordKind.BLOG).record
        assert record.published_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_reads_camel_case_media_fields(self):
        record = check_record(
            _blog(mediaType="video", mediaPath="videos/a.mp4"), RecordKind.BLOG
        ).record
        assert record.media_type == "video"
        assert record.media_path == "videos/a.mp4"
        assert record.has_media

    def test_unknown_media_type_tolerated_but_not_rendered(self):
        check = check_record(
            _blog(mediaType="audio", mediaPath="a.mp3"), RecordKind.BLOG
        )
        assert check.ok
        assert not check.record.has_media

    def test_slug_is_optional(self):
        data = _blog()
        del data["slug"]
        check = check_record(data, RecordKind.BLOG)
        assert check.ok
        assert check.record.slug is None

    def test_non_string_optional_fields_are_ignored(self):
        check = check_record(
            _blog(slug=7, category=3, mediaType=5, mediaPath=["a"], content={}),
            RecordKind.BLOG,
        )
        assert check.ok
        record = check.record
        assert record.slug is None
        assert record.category is None
        assert record.media_type is None
        assert record.media_path is None
        assert record.content is None


class TestProjectRecord:
    def test_accepts_empty_tools(self):
        check = check_record(_project(), RecordKind.PROJECT)
        assert check.ok
        assert isinstance(check.record, ProjectRecord)
        assert check.record.tools == []

    @pytest.mark.parametrize("tools", [None, "SQL", {"a": 1}])
    def test_rejects_tools_that_are_not_an_array(self, tools):
        assert not check_record(_project(tools=tools), RecordKind.PROJECT).ok

    def test_rejects_missing_tools(self):
        data = _project()
        del data["tools"]
        assert not check_record(data, RecordKind.PROJECT).ok

    def test_drops_blank_and_non_string_tools(self):
        record = check_record(
            _project(tools=["SQL", "", 3, None, "  ", "Excel"]), RecordKind.PROJECT
        ).record
        assert record.tools == ["SQL", "Excel"]

    @pytest.mark.parametrize("github", [None, "", 7])
    def test_rejects_bad_github(self, github):
        assert not check_record(_project(github=github), RecordKind.PROJECT).ok

    @pytest.mark.parametrize("field", ["title", "description"])
    def test_rejects_empty_required_text(self, field):
        assert not check_record(_project(**{field: ""}), RecordKind.PROJECT).ok

    def test_rejects_unknown_media_type(self):
        check = check_record(
            _project(mediaType="audio", mediaPath="a.mp3"), RecordKind.PROJECT
        )
        assert not check.ok

    @pytest.mark.parametrize("path", [None, ""])
    def test_media_type_requires_media_path(self, path):
        data = _project(mediaType="image")
        if path is not None:
            data["mediaPath"] = path
        assert not check_record(data, RecordKind.PROJECT).ok

    def test_non_string_media_path_does_not_satisfy_media_type(self):
        assert not check_record(
            _project(mediaType="image", mediaPath=42), RecordKind.PROJECT
        ).ok

    def test_empty_media_type_counts_as_unset(self):
        record = check_record(_project(mediaType=""), RecordKind.PROJECT).record
        assert record.media_type is None
        assert not record.has_media

    def test_video_with_path_has_media(self):
        record = check_record(
            _project(mediaType="video", mediaPath="v.mp4"), RecordKind.PROJECT
        ).record
        assert record.has_media


class TestValidateRecords:
    @pytest.mark.parametrize("data", [{"posts": []}, "[]", None, 3])
    def test_non_array_raises_format_error(self, data):
        with pytest.raises(FormatError):
            validate_records(data, RecordKind.BLOG)

    def test_empty_array_is_empty_not_an_error(self):
        assert validate_records([], RecordKind.BLOG) == []

    def test_output_is_ordered_subset_of_input(self):
        data = [
            _blog(title="First", date="2023-01-01"),
            _blog(title="", date="2023-02-01"),
            _blog(title="Third", date="2025-01-01"),
            _blog(title="Fourth", date="bad"),
            _blog(title="Fifth", date="2020-05-05"),
        ]
        records = validate_records(data, RecordKind.BLOG)
        assert [r.title for r in records] == ["First", "Third", "Fifth"]

    def test_non_object_entries_are_dropped(self):
        data = [None, "a string", 12, ["list"], _blog(title="Kept")]
        records = validate_records(data, RecordKind.BLOG)
        assert [r.title for r in records] == ["Kept"]

    def test_non_object_check_reports_type(self):
        check = check_record("nope", RecordKind.PROJECT, index=4)
        assert not check.ok
        assert check.index == 4
        assert "expected object" in check.errors[0]

    def test_dropped_records_are_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="portfolio.services.validator"):
            validate_records([_blog(summary="")], RecordKind.BLOG)
        assert "Dropping malformed blog record #0" in caplog.text
