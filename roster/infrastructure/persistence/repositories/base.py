"""Base repository: generic CRUD over the request-scoped unit of work."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roster.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, create, persist and delete.

    Writes only flush; the transaction is committed (or rolled back) by the
    session dependency, so several repository calls in one command share a
    single atomic unit of work.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Add a new record and flush so its primary key and defaults are populated."""
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def persist(self, *objs: Base) -> None:
        """Stage every given object and flush them together in one batch."""
        self.db.add_all(objs)
        await self.db.flush()

    async def delete(self, obj: ModelType) -> None:
        """Delete the record; the flush also applies database cascades."""
        await self.db.delete(obj)
        await self.db.flush()
