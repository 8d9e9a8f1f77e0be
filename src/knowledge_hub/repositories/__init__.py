"""Repositories package."""

from knowledge_hub.repositories.base import OwnedRepository
from knowledge_hub.repositories.collections import (
    BookmarkRepository,
    NoteRepository,
    bookmark_repository,
    note_repository,
)

__all__ = [
    "OwnedRepository",
    "NoteRepository",
    "BookmarkRepository",
    "note_repository",
    "bookmark_repository",
]
