"""
Notes API Router

REST endpoints for note CRUD, scoped to the requesting owner.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_hub.api.deps import get_owner
from knowledge_hub.core.database import get_db
from knowledge_hub.models import Note as NoteRecord
from knowledge_hub.repositories import note_repository as repo
from knowledge_hub.schemas.notes import Note, NoteChanges, NoteDraft

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_or_404(db: AsyncSession, owner: str, note_id: uuid.UUID) -> NoteRecord:
    db_note = await repo.get_for_owner(db, owner, note_id)
    if db_note is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Note not found"
        )
    return db_note


@router.get("/", response_model=list[Note])
async def list_notes(
    owner: str = Depends(get_owner), db: AsyncSession = Depends(get_db)
):
    """List the owner's notes, most recently updated first."""
    return await repo.list_for_owner(db, owner)


@router.post("/", response_model=Note, status_code=status.HTTP_201_CREATED)
async def create_note(
    note: NoteDraft,
    owner: str = Depends(get_owner),
    db: AsyncSession = Depends(get_db),
):
    """Create a new note for the owner."""
    new_note = await repo.create(db, owner, note)
    logger.info("Note %s created for %s", new_note.id, owner)
    return new_note


@router.get("/{note_id}", response_model=Note)
async def read_note(
    note_id: uuid.UUID,
    owner: str = Depends(get_owner),
    db: AsyncSession = Depends(get_db),
):
    """Retrieve a single note by ID."""
    return await _get_or_404(db, owner, note_id)


@router.patch("/{note_id}", response_model=Note)
async def update_note(
    note_id: uuid.UUID,
    changes: NoteChanges,
    owner: str = Depends(get_owner),
    db: AsyncSession = Depends(get_db),
):
    """Apply a partial update and return the full, refreshed note."""
    db_note = await _get_or_404(db, owner, note_id)
    return await repo.update(db, db_note, changes)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: uuid.UUID,
    owner: str = Depends(get_owner),
    db: AsyncSession = Depends(get_db),
):
    """Delete a note."""
    db_note = await _get_or_404(db, owner, note_id)
    await repo.delete(db, db_note)
    logger.info("Note %s deleted for %s", note_id, owner)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
