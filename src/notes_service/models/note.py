"""
Note Model

The single persisted entity: a title/content pair with a server-assigned
UUID and creation/update timestamps.
"""

import uuid

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notes_service.models.base import Base, TimestampMixin

TITLE_MAX_LENGTH = 255


class Note(Base, TimestampMixin):
    """
    Note entity.

    Attributes:
        id: UUID4 primary key (generated Python-side, never reused).
        title: Note title (max 255 chars).
        content: Full note content, no length limit.
        created_at: Insertion timestamp.
        updated_at: Last successful update (equals created_at until then).
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Note(id={self.id!s:.8}, title='{self.title[:20]}...')>"
