"""
Base Repository

Generic repository pattern implementation for async SQLAlchemy CRUD
operations on user-owned collections. Every query is scoped to an owner.
"""

import uuid
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_hub.models.base import Base, utcnow

ModelType = TypeVar("ModelType", bound=Base)


class OwnedRepository(Generic[ModelType]):
    """
    Generic repository providing CRUD over one user-owned table.

    All methods expect an externally managed session (injected via FastAPI
    dependency). Rows belonging to another owner behave as if absent.

    Usage:
        class NoteRepository(OwnedRepository[Note]):
            def __init__(self):
                super().__init__(Note)
    """

    def __init__(self, model: type[ModelType]):
        self.model = model

    async def list_for_owner(
        self, session: AsyncSession, owner: str
    ) -> Sequence[ModelType]:
        """All rows of ``owner``, most recently updated first."""
        stmt = (
            select(self.model)
            .where(self.model.user_id == owner)  # type: ignore[attr-defined]
            .order_by(self.model.updated_at.desc())  # type: ignore[attr-defined]
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def create(self, session: AsyncSession, owner: str, obj_in: Any) -> ModelType:
        """
        Create a new record owned by ``owner``.

        Args:
            session: Active database session.
            owner: Owner identifier stamped on the row.
            obj_in: Pydantic schema or dict with entity data.

        Returns:
            The created entity with generated fields (id, timestamps) populated.
        """
        data = obj_in.model_dump() if hasattr(obj_in, "model_dump") else dict(obj_in)
        db_obj = self.model(**data, user_id=owner)
        session.add(db_obj)
        await session.commit()
        await session.refresh(db_obj)
        return db_obj

    async def get_for_owner(
        self, session: AsyncSession, owner: str, id: uuid.UUID
    ) -> ModelType | None:
        """Get a record by primary key. Returns None if absent or not owned."""
        stmt = select(self.model).where(
            self.model.id == id,  # type: ignore[attr-defined]
            self.model.user_id == owner,  # type: ignore[attr-defined]
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def update(
        self,
        session: AsyncSession,
        db_obj: ModelType,
        obj_in: Any,
    ) -> ModelType:
        """
        Update a record with partial data and refresh ``updated_at``.

        Args:
            session: Active database session.
            db_obj: Existing entity to update.
            obj_in: Pydantic schema or dict (only provided fields are updated).
        """
        update_data = (
            obj_in.model_dump(exclude_unset=True)  # Partial update support
            if hasattr(obj_in, "model_dump")
            else obj_in
        )
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        # A favorite toggle is still a touch; bump even if nothing else changed
        db_obj.updated_at = utcnow()  # type: ignore[attr-defined]
        await session.commit()
        await session.refresh(db_obj)
        return db_obj

    async def delete(self, session: AsyncSession, db_obj: ModelType) -> None:
        """Hard delete a record."""
        await session.delete(db_obj)
        await session.commit()
