"""
Entity Types

Describes each synchronized collection (notes, bookmarks) to the generic
EntityStore: which pydantic models to validate drafts and partial updates
with, how a validated draft becomes the insert payload, which fields free
text search looks at, and the wording of user notifications.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from knowledge_hub.core.errors import ServiceError, ValidationError
from knowledge_hub.schemas.base import ChangesBase, EntityRead
from knowledge_hub.schemas.bookmarks import (
    Bookmark,
    BookmarkChanges,
    BookmarkDraft,
    derive_bookmark_title,
)
from knowledge_hub.schemas.notes import Note, NoteChanges, NoteDraft

E = TypeVar("E", bound=EntityRead)


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or None
    message = first["msg"].removeprefix("Value error, ")
    return ValidationError(message, field=field)


def _dump_draft(draft: BaseModel) -> dict[str, Any]:
    return draft.model_dump()


@dataclass(frozen=True)
class EntityType(Generic[E]):
    """
    Static description of one collection.

    Attributes:
        collection: Service-side collection name.
        label: Singular noun used in messages ("note").
        model: Pydantic model for server-confirmed entities.
        draft_model: Model validating create input.
        changes_model: Model validating partial updates.
        search_fields: Text fields searched besides tags, in order.
        created_message: Success message for create.
        prepare: Turns a validated draft into the insert payload.
    """

    collection: str
    label: str
    model: type[E]
    draft_model: type[BaseModel]
    changes_model: type[ChangesBase]
    search_fields: tuple[str, ...]
    created_message: str
    prepare: Callable[[Any], dict[str, Any]] = _dump_draft

    def build_draft(self, draft: BaseModel | Mapping[str, Any]) -> BaseModel:
        """Validate create input, raising ``ValidationError`` on bad fields."""
        if isinstance(draft, self.draft_model):
            return draft
        if isinstance(draft, BaseModel):
            draft = draft.model_dump(exclude_unset=True)
        try:
            return self.draft_model.model_validate(draft)
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e

    def build_changes(self, changes: BaseModel | Mapping[str, Any]) -> ChangesBase:
        """Validate a partial update, raising ``ValidationError`` on bad fields."""
        if isinstance(changes, self.changes_model):
            return changes
        if isinstance(changes, BaseModel):
            changes = changes.model_dump(exclude_unset=True)
        try:
            return self.changes_model.model_validate(changes)
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e

    def parse(self, data: Any) -> E:
        """Parse a service response; a malformed one is a service failure."""
        try:
            return self.model.model_validate(data)
        except PydanticValidationError as e:
            raise ServiceError(
                f"Malformed {self.label} returned by the service: {e.error_count()} error(s)"
            ) from e


def _prepare_bookmark(draft: BookmarkDraft) -> dict[str, Any]:
    fields = draft.model_dump()
    if not fields["title"]:
        fields["title"] = derive_bookmark_title(draft.url)
    return fields


NOTE_TYPE: EntityType[Note] = EntityType(
    collection="notes",
    label="note",
    model=Note,
    draft_model=NoteDraft,
    changes_model=NoteChanges,
    search_fields=("title", "content"),
    created_message="Note created",
)

BOOKMARK_TYPE: EntityType[Bookmark] = EntityType(
    collection="bookmarks",
    label="bookmark",
    model=Bookmark,
    draft_model=BookmarkDraft,
    changes_model=BookmarkChanges,
    search_fields=("title", "url", "description"),
    created_message="Bookmark saved",
    prepare=_prepare_bookmark,
)
