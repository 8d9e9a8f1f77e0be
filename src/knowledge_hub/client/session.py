"""
Hub Session

Per-user pairing of the notes and bookmarks stores. The current user is
injected explicitly; switching user discards both collections and loads
fresh ones, nothing is merged across users.
"""

from __future__ import annotations

import asyncio
import logging

import httpx
from pydantic import BaseModel, ConfigDict

from knowledge_hub.client.notifier import Notifier
from knowledge_hub.client.service import EntityService, HttpEntityService
from knowledge_hub.client.store import BookmarkStore, NoteStore
from knowledge_hub.schemas.bookmarks import Bookmark
from knowledge_hub.schemas.notes import Note

logger = logging.getLogger(__name__)

RECENT_LIMIT = 3


class HubSummary(BaseModel):
    """Dashboard figures for the current user."""

    total_notes: int
    total_bookmarks: int
    favorite_notes: int
    favorite_bookmarks: int
    recent_notes: list[Note]
    recent_bookmarks: list[Bookmark]

    model_config = ConfigDict(frozen=True)


class HubSession:
    """
    Owns one NoteStore and one BookmarkStore for the current user.

    Usage::

        session = HubSession.over_http("user-1")
        await session.start()
        view = FilteredView(session.notes)
        ...
        await session.aclose()
    """

    def __init__(
        self,
        user_id: str | None,
        *,
        notes_service: EntityService,
        bookmarks_service: EntityService,
        notifier: Notifier | None = None,
        serialize_mutations: bool | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._notes_service = notes_service
        self._bookmarks_service = bookmarks_service
        self._notifier = notifier
        self._serialize = serialize_mutations
        self._client = client  # closed by aclose() when the session built it
        self._build_stores(user_id)

    @classmethod
    def over_http(
        cls,
        user_id: str | None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        notifier: Notifier | None = None,
        serialize_mutations: bool | None = None,
    ) -> HubSession:
        """Session talking to the REST service at ``base_url`` (API_URL)."""
        client = HttpEntityService.build_client(base_url, timeout, transport)
        return cls(
            user_id,
            notes_service=HttpEntityService("notes", client),
            bookmarks_service=HttpEntityService("bookmarks", client),
            notifier=notifier,
            serialize_mutations=serialize_mutations,
            client=client,
        )

    @property
    def user_id(self) -> str | None:
        return self.notes.user_id

    async def start(self) -> bool:
        """Load both collections concurrently. True if both loaded."""
        if self.user_id is None:
            return False
        results = await asyncio.gather(self.notes.load(), self.bookmarks.load())
        return all(results)

    async def switch_user(self, user_id: str | None) -> bool:
        """Drop the current collections and load the new user's."""
        if user_id == self.user_id:
            return await self.start()
        logger.info("Switching session user %s -> %s", self.user_id, user_id)
        self.notes.close()
        self.bookmarks.close()
        self._build_stores(user_id)
        return await self.start()

    def summary(self) -> HubSummary:
        notes = self.notes.entities
        bookmarks = self.bookmarks.entities
        return HubSummary(
            total_notes=len(notes),
            total_bookmarks=len(bookmarks),
            favorite_notes=sum(1 for n in notes if n.is_favorite),
            favorite_bookmarks=sum(1 for b in bookmarks if b.is_favorite),
            recent_notes=list(notes[:RECENT_LIMIT]),
            recent_bookmarks=list(bookmarks[:RECENT_LIMIT]),
        )

    async def aclose(self) -> None:
        self.notes.close()
        self.bookmarks.close()
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HubSession:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _build_stores(self, user_id: str | None) -> None:
        self.notes = NoteStore(
            self._notes_service,
            user_id,
            notifier=self._notifier,
            serialize_mutations=self._serialize,
        )
        self.bookmarks = BookmarkStore(
            self._bookmarks_service,
            user_id,
            notifier=self._notifier,
            serialize_mutations=self._serialize,
        )
