"""
Hub Session Unit Tests

Per-user store lifecycle: start, summary, user switching.
"""

from __future__ import annotations

import pytest

from knowledge_hub.client.session import HubSession


@pytest.fixture
def session(note_service, bookmark_service, notifier) -> HubSession:
    return HubSession(
        "user-1",
        notes_service=note_service,
        bookmarks_service=bookmark_service,
        notifier=notifier,
    )


@pytest.mark.asyncio
async def test_start_loads_both_collections(session, note_service, bookmark_service):
    note_service.seed(title="N")
    bookmark_service.seed(url="https://example.com", title="Example")

    assert await session.start() is True

    assert len(session.notes) == 1
    assert len(session.bookmarks) == 1


@pytest.mark.asyncio
async def test_start_reports_partial_failure(session, bookmark_service, notifier):
    bookmark_service.fail_on.add("list")

    assert await session.start() is False
    assert notifier.messages == [("error", "Failed to fetch bookmarks")]


@pytest.mark.asyncio
async def test_summary_counts_and_recent(session, note_service, bookmark_service):
    for i in range(5):
        note_service.seed(title=f"Note {i}", is_favorite=i % 2 == 0)
    bookmark_service.seed(url="https://a.example", is_favorite=True)
    await session.start()

    summary = session.summary()

    assert summary.total_notes == 5
    assert summary.favorite_notes == 3
    assert summary.total_bookmarks == 1
    assert summary.favorite_bookmarks == 1
    assert [n.title for n in summary.recent_notes] == ["Note 4", "Note 3", "Note 2"]


@pytest.mark.asyncio
async def test_switch_user_discards_old_collection(session, note_service):
    note_service.seed(owner="user-1", title="Mine")
    note_service.seed(owner="user-2", title="Theirs")
    await session.start()
    old_store = session.notes

    await session.switch_user("user-2")

    assert old_store.closed
    assert old_store.entities == ()
    assert session.user_id == "user-2"
    assert [n.title for n in session.notes.entities] == ["Theirs"]


@pytest.mark.asyncio
async def test_no_user_session_is_inert(note_service, bookmark_service):
    session = HubSession(
        None, notes_service=note_service, bookmarks_service=bookmark_service
    )

    assert await session.start() is False
    assert await session.notes.create({"title": "x"}) is None
    assert note_service.calls == []
