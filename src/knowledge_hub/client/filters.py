"""
View Filter Engine

Pure functions deriving the displayed subset of a collection from the
current filter criteria, plus a small memoizing view that recomputes only
when the store or the criteria change.

An entity matches when all of these hold:
    - favorite mode is ``all``, or the entity is a favorite;
    - every selected tag is one of the entity's tags;
    - the search text is empty, or is a case-insensitive substring of one
      of the searchable fields or of one of the tags.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Generic

from pydantic import BaseModel, ConfigDict, Field, field_validator

from knowledge_hub.client.entities import E
from knowledge_hub.schemas.base import EntityRead

if TYPE_CHECKING:
    from knowledge_hub.client.store import EntityStore


class FavoriteMode(str, Enum):
    ALL = "all"
    FAVORITES_ONLY = "favorites-only"


class FilterCriteria(BaseModel):
    """Transient search / favorite / tag selection. Immutable."""

    search: str = ""
    favorite_mode: FavoriteMode = FavoriteMode.ALL
    tags: frozenset[str] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True)

    @field_validator("tags", mode="before")
    @classmethod
    def _lowercase_tags(cls, value: Iterable[str]) -> frozenset[str]:
        return frozenset(tag.strip().lower() for tag in value if tag.strip())

    @property
    def is_identity(self) -> bool:
        """True when every entity passes."""
        return (
            not self.search
            and self.favorite_mode is FavoriteMode.ALL
            and not self.tags
        )

    def with_search(self, search: str) -> FilterCriteria:
        return self.model_copy(update={"search": search})

    def with_favorite_mode(self, mode: FavoriteMode | str) -> FilterCriteria:
        return self.model_copy(update={"favorite_mode": FavoriteMode(mode)})

    def toggle_tag(self, tag: str) -> FilterCriteria:
        """Select ``tag`` if unselected, otherwise unselect it."""
        tag = tag.strip().lower()
        return self.model_copy(update={"tags": self.tags ^ {tag}})

    def cleared_tags(self) -> FilterCriteria:
        return self.model_copy(update={"tags": frozenset()})


def matches(
    entity: EntityRead, criteria: FilterCriteria, search_fields: Sequence[str]
) -> bool:
    if criteria.favorite_mode is FavoriteMode.FAVORITES_ONLY and not entity.is_favorite:
        return False

    if criteria.tags and not criteria.tags.issubset(entity.tags):
        return False

    needle = criteria.search.lower()
    if not needle:
        return True
    for name in search_fields:
        value = getattr(entity, name, None)
        if value and needle in value.lower():
            return True
    return any(needle in tag.lower() for tag in entity.tags)


def filter_entities(
    entities: Iterable[E], criteria: FilterCriteria, search_fields: Sequence[str]
) -> list[E]:
    """Matching entities in their original (collection) order."""
    return [e for e in entities if matches(e, criteria, search_fields)]


def distinct_tags(entities: Iterable[EntityRead]) -> list[str]:
    """Sorted union of tags across the whole collection."""
    return sorted({tag for entity in entities for tag in entity.tags})


class FilteredView(Generic[E]):
    """
    Derived view over an EntityStore.

    ``items`` and ``all_tags`` are cached and recomputed only when the
    store's version or the criteria change. The view never mutates the
    store.
    """

    def __init__(self, store: EntityStore[E], criteria: FilterCriteria | None = None):
        self.store = store
        self._criteria = criteria or FilterCriteria()
        self._items_key: tuple[int, FilterCriteria] | None = None
        self._items: tuple[E, ...] = ()
        self._tags_version: int | None = None
        self._tags: tuple[str, ...] = ()

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @criteria.setter
    def criteria(self, criteria: FilterCriteria) -> None:
        self._criteria = criteria

    @property
    def items(self) -> tuple[E, ...]:
        key = (self.store.version, self._criteria)
        if key != self._items_key:
            self._items = tuple(
                filter_entities(
                    self.store.entities,
                    self._criteria,
                    self.store.entity_type.search_fields,
                )
            )
            self._items_key = key
        return self._items

    @property
    def all_tags(self) -> tuple[str, ...]:
        version = self.store.version
        if version != self._tags_version:
            self._tags = tuple(distinct_tags(self.store.entities))
            self._tags_version = version
        return self._tags
