"""Models package - re-exports all models for convenient imports."""

from knowledge_hub.models.base import Base, OwnedEntityMixin, TimestampMixin
from knowledge_hub.models.bookmark import Bookmark
from knowledge_hub.models.note import Note

__all__ = [
    "Base",
    "TimestampMixin",
    "OwnedEntityMixin",
    "Note",
    "Bookmark",
]
