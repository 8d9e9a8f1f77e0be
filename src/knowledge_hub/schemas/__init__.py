"""Schemas package - pydantic models shared by the service and the client."""

from knowledge_hub.schemas.base import EntityRead, normalize_tags
from knowledge_hub.schemas.bookmarks import (
    Bookmark,
    BookmarkChanges,
    BookmarkDraft,
    derive_bookmark_title,
    normalize_url,
    validate_http_url,
)
from knowledge_hub.schemas.notes import Note, NoteChanges, NoteDraft

__all__ = [
    "EntityRead",
    "normalize_tags",
    "Note",
    "NoteDraft",
    "NoteChanges",
    "Bookmark",
    "BookmarkDraft",
    "BookmarkChanges",
    "derive_bookmark_title",
    "normalize_url",
    "validate_http_url",
]
