"""
Note Schemas

Pydantic models for Note validation, shared by the REST service and the
client stores. NoteDraft (create), NoteChanges (partial), Note (read).
"""

from pydantic import BaseModel, Field, field_validator

from knowledge_hub.schemas.base import ChangesBase, EntityRead, TagList


def _clean_title(value: str | None) -> str:
    if value is None or not value.strip():
        raise ValueError("Title is required")
    return value.strip()


class NoteDraft(BaseModel):
    """Fields for a new note. Title and content are trimmed."""

    title: str = Field(..., max_length=200, description="Note title, non-empty")
    content: str | None = Field(default=None, description="Note body")
    tags: TagList = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _title_required(cls, value: str | None) -> str:
        return _clean_title(value)

    @field_validator("content")
    @classmethod
    def _strip_content(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None


class NoteChanges(ChangesBase):
    """
    Partial update for a note.

    All fields optional; a title, when given, must still be non-empty.
    """

    title: str | None = Field(default=None, max_length=200)
    content: str | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _title_required(cls, value: str | None) -> str:
        return _clean_title(value)

    @field_validator("content")
    @classmethod
    def _strip_content(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None


class Note(EntityRead):
    """Full note representation as confirmed by the service."""

    title: str
    content: str | None = None
