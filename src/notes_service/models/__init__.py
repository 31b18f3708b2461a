"""Models package - re-exports all models for convenient imports."""

from notes_service.models.base import Base, TimestampMixin, utc_now
from notes_service.models.note import TITLE_MAX_LENGTH, Note

__all__ = [
    "Base",
    "TimestampMixin",
    "utc_now",
    "Note",
    "TITLE_MAX_LENGTH",
]
