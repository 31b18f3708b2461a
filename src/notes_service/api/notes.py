"""
Notes API Router

REST endpoints for note CRUD operations, mounted under ``/api``.

Endpoints:
    GET    /notes       - List all notes, newest first.
    GET    /notes/{id}  - Fetch one note.
    POST   /notes       - Create a note (201).
    PUT    /notes/{id}  - Replace title and content.
    DELETE /notes/{id}  - Hard delete.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from notes_service.core.database import get_db
from notes_service.core.exceptions import NoteNotFoundError, store_errors
from notes_service.repositories.notes import NoteRepository, get_note_repository
from notes_service.schemas.notes import (
    DeleteResponse,
    NoteList,
    NotePayload,
    NoteRead,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_note_id(note_id: str) -> uuid.UUID:
    """A malformed id cannot name an existing note, so it is a 404."""
    try:
        return uuid.UUID(note_id)
    except ValueError:
        raise NoteNotFoundError() from None


@router.get("/notes", response_model=NoteList)
async def list_notes(
    db: AsyncSession = Depends(get_db),
    repo: NoteRepository = Depends(get_note_repository),
):
    """List all notes ordered by creation time, newest first."""
    with store_errors("Failed to fetch notes"):
        notes = await repo.list_all(db)
    return NoteList(notes=[NoteRead.model_validate(n) for n in notes])


@router.get("/notes/{note_id}", response_model=NoteRead)
async def read_note(
    note_id: str,
    db: AsyncSession = Depends(get_db),
    repo: NoteRepository = Depends(get_note_repository),
):
    """Retrieve a single note by ID."""
    key = _parse_note_id(note_id)
    with store_errors("Failed to fetch note"):
        db_note = await repo.get_by_id(db, key)
    if db_note is None:
        raise NoteNotFoundError()
    return db_note


@router.post("/notes", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
async def create_note(
    note: NotePayload,
    db: AsyncSession = Depends(get_db),
    repo: NoteRepository = Depends(get_note_repository),
):
    """Create a new note. The server assigns the id and both timestamps."""
    with store_errors("Failed to create note"):
        new_note = await repo.create(db, note)
    logger.info("Created note %s", new_note.id)
    return new_note


@router.put("/notes/{note_id}", response_model=NoteRead)
async def update_note(
    note_id: str,
    note: NotePayload,
    db: AsyncSession = Depends(get_db),
    repo: NoteRepository = Depends(get_note_repository),
):
    """
    Replace the title and content of an existing note.

    Both fields are required (no partial updates). ``created_at`` is kept,
    ``updated_at`` is refreshed.
    """
    key = _parse_note_id(note_id)
    with store_errors("Failed to update note"):
        db_note = await repo.update(db, key, note)
    if db_note is None:
        raise NoteNotFoundError()
    logger.info("Updated note %s", key)
    return db_note


@router.delete("/notes/{note_id}", response_model=DeleteResponse)
async def delete_note(
    note_id: str,
    db: AsyncSession = Depends(get_db),
    repo: NoteRepository = Depends(get_note_repository),
):
    """Permanently delete a note. A repeated delete of the same id is a 404."""
    key = _parse_note_id(note_id)
    with store_errors("Failed to delete note"):
        deleted = await repo.delete(db, key)
    if not deleted:
        raise NoteNotFoundError()
    logger.info("Deleted note %s", key)
    return DeleteResponse()
