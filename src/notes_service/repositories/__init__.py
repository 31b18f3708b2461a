"""Repositories package."""

from notes_service.repositories.base import BaseRepository
from notes_service.repositories.notes import (
    NoteRepository,
    get_note_repository,
    note_repository,
)

__all__ = [
    "BaseRepository",
    "NoteRepository",
    "get_note_repository",
    "note_repository",
]
