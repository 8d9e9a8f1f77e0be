"""
Shared Entity Schemas

Fields and validation rules common to every collection (notes, bookmarks).
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """
    Trim and lowercase tags, dropping empties and duplicates.

    First occurrence wins, so the display order the user typed is kept.
    """
    seen: list[str] = []
    for tag in tags:
        cleaned = tag.strip().lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


TagList = Annotated[list[str], AfterValidator(normalize_tags)]


class EntityRead(BaseModel):
    """
    Server-confirmed entity snapshot.

    Instances are frozen: the client stores replace entries wholesale
    with whatever the service returns, they never patch them in place.
    """

    id: str
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        # Opaque on the client; the ORM hands us a UUID
        if isinstance(value, UUID):
            return str(value)
        return value


class ChangesBase(BaseModel):
    """Partial update shared fields. Only explicitly set fields are sent."""

    tags: TagList | None = None
    is_favorite: bool | None = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_unset=True)
