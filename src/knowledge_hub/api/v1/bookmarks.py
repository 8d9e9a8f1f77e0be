"""
Bookmarks API Router

REST endpoints for bookmark CRUD, scoped to the requesting owner.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_hub.api.deps import get_owner
from knowledge_hub.core.database import get_db
from knowledge_hub.models import Bookmark as BookmarkRecord
from knowledge_hub.repositories import bookmark_repository as repo
from knowledge_hub.schemas.bookmarks import Bookmark, BookmarkChanges, BookmarkDraft

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_or_404(
    db: AsyncSession, owner: str, bookmark_id: uuid.UUID
) -> BookmarkRecord:
    db_bookmark = await repo.get_for_owner(db, owner, bookmark_id)
    if db_bookmark is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Bookmark not found"
        )
    return db_bookmark


@router.get("/", response_model=list[Bookmark])
async def list_bookmarks(
    owner: str = Depends(get_owner), db: AsyncSession = Depends(get_db)
):
    """List the owner's bookmarks, most recently updated first."""
    return await repo.list_for_owner(db, owner)


@router.post("/", response_model=Bookmark, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    bookmark: BookmarkDraft,
    owner: str = Depends(get_owner),
    db: AsyncSession = Depends(get_db),
):
    """
    Save a new bookmark.

    The title is stored as sent; deriving one from the hostname is the
    client's job, done before the request.
    """
    new_bookmark = await repo.create(db, owner, bookmark)
    logger.info("Bookmark %s created for %s", new_bookmark.id, owner)
    return new_bookmark


@router.get("/{bookmark_id}", response_model=Bookmark)
async def read_bookmark(
    bookmark_id: uuid.UUID,
    owner: str = Depends(get_owner),
    db: AsyncSession = Depends(get_db),
):
    """Retrieve a single bookmark by ID."""
    return await _get_or_404(db, owner, bookmark_id)


@router.patch("/{bookmark_id}", response_model=Bookmark)
async def update_bookmark(
    bookmark_id: uuid.UUID,
    changes: BookmarkChanges,
    owner: str = Depends(get_owner),
    db: AsyncSession = Depends(get_db),
):
    """Apply a partial update and return the full, refreshed bookmark."""
    db_bookmark = await _get_or_404(db, owner, bookmark_id)
    return await repo.update(db, db_bookmark, changes)


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    bookmark_id: uuid.UUID,
    owner: str = Depends(get_owner),
    db: AsyncSession = Depends(get_db),
):
    """Delete a bookmark."""
    db_bookmark = await _get_or_404(db, owner, bookmark_id)
    await repo.delete(db, db_bookmark)
    logger.info("Bookmark %s deleted for %s", bookmark_id, owner)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
