"""
Note Repository

Data access layer for Note entities.
Extends BaseRepository with ordering and whole-resource updates.
"""

import uuid
from collections.abc import Sequence

from sqlalchemy import DateTime, case, literal, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notes_service.models import Note, utc_now
from notes_service.repositories.base import BaseRepository
from notes_service.schemas.notes import NotePayload


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note entities.

    Updates and deletes are single statements, so a note removed by a
    concurrent request is reported as missing rather than half-written.
    No version checks are applied: two concurrent updates of the same
    note both succeed and the later commit wins.
    """

    def __init__(self) -> None:
        super().__init__(Note)

    async def list_all(self, session: AsyncSession) -> Sequence[Note]:
        """All notes, newest first."""
        result = await session.execute(select(Note).order_by(Note.created_at.desc()))
        return result.scalars().all()

    async def create(self, session: AsyncSession, obj_in: NotePayload) -> Note:  # type: ignore[override]
        """Insert a note with a fresh UUID; both timestamps share one instant."""
        now = utc_now()
        return await super().create(
            session,
            {
                "id": uuid.uuid4(),
                "title": obj_in.title,
                "content": obj_in.content,
                "created_at": now,
                "updated_at": now,
            },
        )

    async def update(
        self,
        session: AsyncSession,
        note_id: uuid.UUID,
        obj_in: NotePayload,
    ) -> Note | None:
        """
        Replace title and content of an existing note.

        Args:
            session: Active database session.
            note_id: Note to update.
            obj_in: New title and content (both always replaced).

        Returns:
            The updated note, or None if it does not exist (nothing is written).
        """
        now = literal(utc_now(), DateTime(timezone=True))
        stmt = (
            update(Note)
            .where(Note.id == note_id)
            .values(
                title=obj_in.title,
                content=obj_in.content,
                # Never move updated_at behind created_at, even on clock skew
                updated_at=case((Note.created_at > now, Note.created_at), else_=now),
            )
            .returning(Note)
        )
        result = await session.execute(
            stmt, execution_options={"synchronize_session": False}
        )
        db_note = result.scalars().first()
        await session.commit()
        return db_note


# Module-level instance used as the default FastAPI dependency
note_repository = NoteRepository()


def get_note_repository() -> NoteRepository:
    """FastAPI dependency - returns the shared NoteRepository."""
    return note_repository
