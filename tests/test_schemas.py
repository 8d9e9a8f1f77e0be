"""
Schema Unit Tests

Tag normalization, URL validation helpers, bookmark title derivation and
draft / partial-update validation.
"""

from datetime import UTC, datetime
from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from knowledge_hub.schemas.base import normalize_tags
from knowledge_hub.schemas.bookmarks import (
    BookmarkChanges,
    BookmarkDraft,
    derive_bookmark_title,
    normalize_url,
    validate_http_url,
)
from knowledge_hub.schemas.notes import Note, NoteChanges, NoteDraft


class TestNormalizeTags:
    def test_lowercases_trims_and_dedupes_keeping_first(self):
        assert normalize_tags([" Work", "todo", "WORK", "", "  ", "Idea"]) == [
            "work",
            "todo",
            "idea",
        ]

    def test_draft_tags_normalized(self):
        assert NoteDraft(title="t", tags=["A", "a", "B"]).tags == ["a", "b"]


class TestBookmarkTitle:
    @pytest.mark.parametrize(
        "url, title",
        [
            ("https://www.example.com/page", "example.com"),
            ("http://news.ycombinator.com", "news.ycombinator.com"),
            ("https://WWW.Example.COM", "example.com"),
            ("https://sub.www.example.com", "sub.www.example.com"),
        ],
    )
    def test_hostname_without_leading_www(self, url, title):
        assert derive_bookmark_title(url) == title

    @pytest.mark.parametrize("url", ["not a url", "http://[::1", ""])
    def test_unparsable_url_falls_back_to_raw_string(self, url):
        assert derive_bookmark_title(url) == url


class TestUrlHelpers:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("example.com", "https://example.com"),
            ("  http://example.com ", "http://example.com"),
            ("https://example.com/x", "https://example.com/x"),
        ],
    )
    def test_normalize_url(self, value, expected):
        assert normalize_url(value) == expected

    def test_validate_keeps_original_form(self):
        assert validate_http_url(" https://Example.com ") == "https://Example.com"

    @pytest.mark.parametrize("value", [None, "", "mailto:me@example.com", "//example.com"])
    def test_validate_rejects(self, value):
        with pytest.raises(ValueError):
            validate_http_url(value)


class TestDrafts:
    def test_note_title_required(self):
        with pytest.raises(PydanticValidationError):
            NoteDraft(title="  ")

    def test_note_content_trimmed(self):
        assert NoteDraft(title="t", content="  body \n").content == "body"

    def test_bookmark_draft_defaults(self):
        draft = BookmarkDraft(url="https://example.com")
        assert draft.title == ""
        assert draft.description is None
        assert draft.tags == []

    def test_changes_payload_only_has_set_fields(self):
        assert NoteChanges(is_favorite=True).to_payload() == {"is_favorite": True}
        assert BookmarkChanges(title=" New ").to_payload() == {"title": "New"}

    def test_changes_reject_null_title(self):
        with pytest.raises(PydanticValidationError):
            NoteChanges(title=None)


def test_read_model_stringifies_uuid_ids():
    now = datetime.now(UTC)
    raw_id = uuid4()
    note = Note(id=raw_id, title="t", created_at=now, updated_at=now)
    assert note.id == str(raw_id)
