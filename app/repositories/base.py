"""
Base repository with generic CRUD operations.

All entity-specific repositories inherit from this. The surface is the
record-store contract the services rely on: get, find (equality
filters + ordering), create, update, upsert-by-key, count.
"""
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import BaseModel

# Generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository providing standard CRUD operations.

    Usage:
        class ProfileRepository(BaseRepository[Profile]):
            def __init__(self):
                super().__init__(Profile)
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def _where(self, query, filters: Dict[str, Any]):
        for name, value in filters.items():
            query = query.where(getattr(self.model, name) == value)
        return query

    async def get_by_id(
        self,
        db: AsyncSession,
        id: UUID,
    ) -> Optional[ModelType]:
        """Get a single record by ID."""
        result = await db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def find(
        self,
        db: AsyncSession,
        *,
        order_by: Any = None,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> List[ModelType]:
        """
        Get records matching equality filters.

        Defaults to newest first when no ordering is given.
        """
        query = self._where(select(self.model), filters)

        if order_by is not None:
            query = query.order_by(order_by)
        else:
            query = query.order_by(self.model.created_at.desc())

        if limit is not None:
            query = query.limit(limit)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_one(
        self,
        db: AsyncSession,
        **filters: Any,
    ) -> Optional[ModelType]:
        """Get the first record matching equality filters, if any."""
        query = self._where(select(self.model), filters).limit(1)
        result = await db.execute(query)
        return result.scalars().first()

    async def count(
        self,
        db: AsyncSession,
        **filters: Any,
    ) -> int:
        """Count records matching equality filters."""
        query = self._where(select(func.count()).select_from(self.model), filters)
        result = await db.execute(query)
        return result.scalar() or 0

    async def create(
        self,
        db: AsyncSession,
        **kwargs: Any,
    ) -> ModelType:
        """Create a new record."""
        instance = self.model(**kwargs)
        db.add(instance)
        await db.flush()
        await db.refresh(instance)
        return instance

    async def update(
        self,
        db: AsyncSession,
        instance: ModelType,
        **kwargs: Any,
    ) -> ModelType:
        """Update an existing record."""
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
        await db.flush()
        await db.refresh(instance)
        return instance

    async def upsert(
        self,
        db: AsyncSession,
        key: Dict[str, Any],
        **values: Any,
    ) -> ModelType:
        """
        Insert or update the record identified by key columns.

        Select-then-write keeps this portable across backends; concurrent
        upserts on the same key are resolved by the unique constraint.
        """
        existing = await self.find_one(db, **key)
        if existing is None:
            return await self.create(db, **key, **values)
        return await self.update(db, existing, **values)
