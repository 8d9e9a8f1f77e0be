"""
Pytest Configuration and Fixtures

Shared fixtures for the client store tests: an in-memory stand-in for the
remote persistence service with failure injection, and a notifier that
records every message.
"""

import os

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Test environment defaults, set before any knowledge_hub imports so the
# pydantic Settings singleton sees them.
# ---------------------------------------------------------------------------
load_dotenv()  # .env → os.environ (no-op if file is missing)

_test_env = {
    "POSTGRES_USER": "hub",
    "POSTGRES_PASSWORD": "hub_password",
    "POSTGRES_HOST": "localhost",
    "POSTGRES_PORT": "5432",
    "POSTGRES_DB": "hub_db",
    "API_URL": "http://testserver",
    "SERIALIZE_MUTATIONS": "true",
}
for _key, _value in _test_env.items():
    os.environ.setdefault(_key, _value)

# ---------------------------------------------------------------------------
# Imports (safe now that env vars are set)
# ---------------------------------------------------------------------------
import asyncio  # noqa: E402
import uuid  # noqa: E402
from datetime import UTC, datetime, timedelta  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402

from knowledge_hub.client.store import BookmarkStore, NoteStore  # noqa: E402
from knowledge_hub.core.errors import ServiceError  # noqa: E402

USER_ID = "user-1"


class FakeEntityService:
    """
    In-memory EntityService.

    Timestamps advance one second per write so ordering is deterministic.
    ``fail_on`` holds operation names ("list", "insert", "update",
    "delete") that raise ServiceError. ``update_delays`` is consumed one
    entry per update call to simulate slow responses.
    """

    def __init__(self, collection: str):
        self.collection = collection
        self.rows: dict[str, dict[str, Any]] = {}
        self.fail_on: set[str] = set()
        self.update_delays: list[float] = []
        self.calls: list[tuple[str, Any]] = []
        self._now = datetime(2024, 1, 1, tzinfo=UTC)

    def _tick(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise ServiceError(f"{operation} {self.collection} failed", operation=operation)

    @staticmethod
    def _public(row: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in row.items() if k != "owner"}

    def seed(self, owner: str = USER_ID, **fields: Any) -> dict[str, Any]:
        """Put a row straight into the backing store."""
        now = self._tick()
        row = {
            "id": str(uuid.uuid4()),
            "tags": [],
            "is_favorite": False,
            "created_at": now,
            "updated_at": now,
            **fields,
            "owner": owner,
        }
        self.rows[row["id"]] = row
        return self._public(row)

    async def list(self, owner: str) -> list[dict[str, Any]]:
        self.calls.append(("list", owner))
        self._check("list")
        owned = [r for r in self.rows.values() if r["owner"] == owner]
        owned.sort(key=lambda r: r["updated_at"], reverse=True)
        return [self._public(r) for r in owned]

    async def insert(self, owner: str, fields: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("insert", fields))
        self._check("insert")
        return self.seed(owner, **fields)

    async def update(
        self, owner: str, entity_id: str, fields: dict[str, Any]
    ) -> dict[str, Any]:
        self.calls.append(("update", (entity_id, fields)))
        if self.update_delays:
            await asyncio.sleep(self.update_delays.pop(0))
        self._check("update")
        row = self.rows.get(entity_id)
        if row is None or row["owner"] != owner:
            raise ServiceError("not found", operation="update", status_code=404)
        row.update(fields)
        row["updated_at"] = self._tick()
        return self._public(row)

    async def delete(self, owner: str, entity_id: str) -> None:
        self.calls.append(("delete", entity_id))
        self._check("delete")
        row = self.rows.get(entity_id)
        if row is None or row["owner"] != owner:
            raise ServiceError("not found", operation="delete", status_code=404)
        del self.rows[entity_id]


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def note_service() -> FakeEntityService:
    return FakeEntityService("notes")


@pytest.fixture
def bookmark_service() -> FakeEntityService:
    return FakeEntityService("bookmarks")


@pytest.fixture
def note_store(note_service, notifier) -> NoteStore:
    """NoteStore for USER_ID, not loaded yet."""
    return NoteStore(note_service, USER_ID, notifier=notifier)


@pytest.fixture
def bookmark_store(bookmark_service, notifier) -> BookmarkStore:
    """BookmarkStore for USER_ID, not loaded yet."""
    return BookmarkStore(bookmark_service, USER_ID, notifier=notifier)
