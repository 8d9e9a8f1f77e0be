"""
Entity Store

Client-side source of truth for one user's collection (notes or
bookmarks), kept in step with the remote persistence service.

Consistency:
    Local state only ever changes after the service confirms a mutation,
    and always to exactly what the service returned. A failed call leaves
    the collection untouched and produces one error notification.

Ordering:
    The collection is ordered most recently updated first. Creates go to
    the front, updates replace in place, deletes remove in place.

Concurrency:
    With ``serialize_mutations`` on, mutations on the same id wait for
    each other so they apply in issue order. Completions arriving after
    ``close()`` are dropped.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Mapping
from typing import Any, Generic

from pydantic import BaseModel

from knowledge_hub.client.entities import BOOKMARK_TYPE, NOTE_TYPE, E, EntityType
from knowledge_hub.client.notifier import LoggingNotifier, Notifier
from knowledge_hub.client.service import EntityService
from knowledge_hub.core.config import settings
from knowledge_hub.core.errors import ServiceError
from knowledge_hub.schemas.bookmarks import Bookmark
from knowledge_hub.schemas.notes import Note

logger = logging.getLogger(__name__)


class EntityStore(Generic[E]):
    """
    Generic synchronized collection.

    Args:
        entity_type: Description of the collection (models, messages).
        service: Remote persistence service for that collection.
        user_id: Current user, or None when nobody is signed in. Without
            a user every operation is a no-op returning its failure value.
        notifier: Receives one message per mutation outcome.
        serialize_mutations: Queue mutations per entity id. Defaults to
            the SERIALIZE_MUTATIONS setting.

    Usage::

        store = NoteStore(service, user_id="u1")
        await store.load()
        note = await store.create({"title": "Groceries", "tags": ["Home"]})
        await store.toggle_favorite(note.id)
    """

    def __init__(
        self,
        entity_type: EntityType[E],
        service: EntityService,
        user_id: str | None,
        *,
        notifier: Notifier | None = None,
        serialize_mutations: bool | None = None,
    ):
        self.entity_type = entity_type
        self._service = service
        self._user_id = user_id
        self._notifier = notifier or LoggingNotifier()
        self._serialize = (
            settings.SERIALIZE_MUTATIONS
            if serialize_mutations is None
            else serialize_mutations
        )
        # Insertion order is display order
        self._entities: dict[str, E] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._version = 0
        self._loading = False
        self._closed = False

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def entities(self) -> tuple[E, ...]:
        """Snapshot of the collection, most recently updated first."""
        return tuple(self._entities.values())

    @property
    def version(self) -> int:
        """Bumped on every local change; derived views key on it."""
        return self._version

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def closed(self) -> bool:
        return self._closed

    def get(self, entity_id: str) -> E | None:
        return self._entities.get(entity_id)

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    # ------------------------------------------------------------------
    # Synchronization
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """
        Replace the collection with the service's current listing.

        Returns:
            True on success. False when there is no user, the store is
            closed, or the fetch failed; a failed fetch keeps the
            previously loaded entities.
        """
        if self._user_id is None or self._closed:
            return False

        collection = self.entity_type.collection
        self._loading = True
        try:
            rows = await self._service.list(self._user_id)
            fetched = [self.entity_type.parse(row) for row in rows]
        except ServiceError as e:
            if self._closed:
                return False
            logger.error("Error fetching %s: %s", collection, e)
            self._notifier.error(f"Failed to fetch {collection}")
            return False
        finally:
            self._loading = False

        if self._closed:
            logger.debug("Dropping %s listing for closed store", collection)
            return False

        self._entities = {entity.id: entity for entity in fetched}
        self._touch()
        logger.info("Loaded %d %s for %s", len(fetched), collection, self._user_id)
        return True

    refetch = load

    async def create(self, draft: BaseModel | Mapping[str, Any]) -> E | None:
        """
        Validate ``draft``, insert it remotely, then prepend the result.

        Raises:
            ValidationError: Required field missing or malformed. Nothing
                is sent and no notification is produced.

        Returns:
            The server-confirmed entity, or None on failure / no user.
        """
        if self._user_id is None or self._closed:
            return None

        validated = self.entity_type.build_draft(draft)
        fields = self.entity_type.prepare(validated)
        label = self.entity_type.label

        try:
            data = await self._service.insert(self._user_id, fields)
            entity = self.entity_type.parse(data)
        except ServiceError as e:
            if not self._closed:
                logger.error("Error creating %s: %s", label, e)
                self._notifier.error(f"Failed to create {label}")
            return None

        if self._closed:
            logger.debug("Dropping created %s %s for closed store", label, entity.id)
            return None

        self._entities = {entity.id: entity, **self._entities}
        self._touch()
        self._notifier.success(self.entity_type.created_message)
        return entity

    async def update(
        self, entity_id: str, changes: BaseModel | Mapping[str, Any]
    ) -> E | None:
        """
        Send a partial update and adopt the server's full entity.

        Raises:
            ValidationError: A supplied field is malformed (e.g. empty
                note title, invalid bookmark URL).

        Returns:
            The server-confirmed entity, or None on failure / no user.
        """
        if self._user_id is None or self._closed:
            return None

        payload = self.entity_type.build_changes(changes).to_payload()
        async with self._mutation_lock(entity_id):
            return await self._apply_update(self._user_id, entity_id, payload)

    async def remove(self, entity_id: str) -> bool:
        """Delete remotely, then drop locally. Returns True on success."""
        if self._user_id is None or self._closed:
            return False

        label = self.entity_type.label
        async with self._mutation_lock(entity_id):
            try:
                await self._service.delete(self._user_id, entity_id)
            except ServiceError as e:
                if not self._closed:
                    logger.error("Error deleting %s %s: %s", label, entity_id, e)
                    self._notifier.error(f"Failed to delete {label}")
                return False

            if self._closed:
                return False

            self._entities.pop(entity_id, None)
            self._touch()
            self._notifier.success(f"{label.capitalize()} deleted")
            return True

    async def toggle_favorite(self, entity_id: str) -> E | None:
        """
        Invert ``is_favorite`` for a locally known entity.

        Unknown ids are ignored: no remote call, no notification.
        """
        if self._user_id is None or self._closed:
            return None

        async with self._mutation_lock(entity_id):
            current = self._entities.get(entity_id)
            if current is None:
                return None
            return await self._apply_update(
                self._user_id, entity_id, {"is_favorite": not current.is_favorite}
            )

    def close(self) -> None:
        """
        Discard the collection (session ended or user switched).

        In-flight calls still complete remotely but no longer touch local
        state or notify.
        """
        self._closed = True
        self._entities = {}
        self._locks.clear()
        self._touch()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _apply_update(
        self, owner: str, entity_id: str, payload: dict[str, Any]
    ) -> E | None:
        # Caller holds the per-id lock when serialization is on
        label = self.entity_type.label
        try:
            data = await self._service.update(owner, entity_id, payload)
            entity = self.entity_type.parse(data)
        except ServiceError as e:
            if not self._closed:
                logger.error("Error updating %s %s: %s", label, entity_id, e)
                self._notifier.error(f"Failed to update {label}")
            return None

        if self._closed:
            return None

        if entity_id in self._entities:
            self._entities[entity_id] = entity
            self._touch()
        else:
            logger.warning("Updated %s %s is not in the local collection", label, entity_id)
        self._notifier.success(f"{label.capitalize()} updated")
        return entity

    def _mutation_lock(
        self, entity_id: str
    ) -> contextlib.AbstractAsyncContextManager[Any]:
        if not self._serialize:
            return contextlib.nullcontext()
        lock = self._locks.get(entity_id)
        if lock is None:
            lock = self._locks[entity_id] = asyncio.Lock()
        return lock

    def _touch(self) -> None:
        self._version += 1


class NoteStore(EntityStore[Note]):
    """Synchronized notes collection."""

    def __init__(
        self,
        service: EntityService,
        user_id: str | None,
        *,
        notifier: Notifier | None = None,
        serialize_mutations: bool | None = None,
    ):
        super().__init__(
            NOTE_TYPE,
            service,
            user_id,
            notifier=notifier,
            serialize_mutations=serialize_mutations,
        )


class BookmarkStore(EntityStore[Bookmark]):
    """Synchronized bookmarks collection; empty titles come from the hostname."""

    def __init__(
        self,
        service: EntityService,
        user_id: str | None,
        *,
        notifier: Notifier | None = None,
        serialize_mutations: bool | None = None,
    ):
        super().__init__(
            BOOKMARK_TYPE,
            service,
            user_id,
            notifier=notifier,
            serialize_mutations=serialize_mutations,
        )
