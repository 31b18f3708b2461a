"""
Base Repository

Generic repository pattern implementation for async SQLAlchemy CRUD operations.
Provides type-safe database access with consistent session handling.
"""

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from notes_service.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository providing common CRUD operations.

    Implements the Repository pattern with async SQLAlchemy. All methods
    expect an externally managed session (injected via FastAPI dependency).

    Usage:
        class NoteRepository(BaseRepository[Note]):
            def __init__(self):
                super().__init__(Note)
    """

    def __init__(self, model: type[ModelType]):
        self.model = model

    async def create(self, session: AsyncSession, obj_in: Any) -> ModelType:
        """
        Create a new record.

        Args:
            session: Active database session.
            obj_in: Pydantic schema or dict with entity data.

        Returns:
            The created entity with database-generated fields populated.
        """
        data = obj_in.model_dump() if hasattr(obj_in, "model_dump") else obj_in
        db_obj = self.model(**data)
        session.add(db_obj)
        await session.commit()
        await session.refresh(db_obj)
        return db_obj

    async def get_by_id(
        self, session: AsyncSession, id: uuid.UUID
    ) -> ModelType | None:
        """Get a record by primary key. Returns None if not found."""
        result = await session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalars().first()

    async def delete(self, session: AsyncSession, id: uuid.UUID) -> bool:
        """
        Hard delete a record by primary key.

        Returns:
            False if no record had that key, True once it is gone.
        """
        stmt = (
            delete(self.model)
            .where(self.model.id == id)  # type: ignore[attr-defined]
            .returning(self.model.id)  # type: ignore[attr-defined]
        )
        result = await session.execute(
            stmt, execution_options={"synchronize_session": False}
        )
        deleted = result.scalar_one_or_none()
        await session.commit()
        return deleted is not None
