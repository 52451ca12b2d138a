"""Base repository: get-by-id, re-fetching create, single-column update, delete."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, inspect as sa_inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cleo.core.exceptions import NotFoundError
from cleo.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Thin CRUD over one table.

    Every statement runs on the caller's session; nothing here commits.
    The request handler commits once, so a guard check and the mutation
    that follows it share one transaction.
    """

    model: type[ModelType]
    label: str = "Record"

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @property
    def _pk(self) -> Any:
        return getattr(self.model, sa_inspect(self.model).primary_key[0].key)

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.label} not found.")

    async def _fetch_one(self, *criteria: Any) -> ModelType:
        result = await self.db.execute(select(self.model).where(*criteria))
        obj = result.scalar_one_or_none()
        if obj is None:
            raise self._not_found()
        return obj

    async def _fetch_all(self, *criteria: Any) -> list[ModelType]:
        result = await self.db.execute(select(self.model).where(*criteria))
        return list(result.scalars().all())

    async def get_by_id(self, entity_id: str) -> ModelType:
        return await self._fetch_one(self._pk == entity_id)

    async def _insert(self, obj: ModelType) -> ModelType:
        """INSERT, then read the row back by its generated id."""
        self.db.add(obj)
        await self.db.flush()
        return await self.get_by_id(getattr(obj, self._pk.key))

    async def _update_column(
        self, entity_id: str, column: str, value: Any, *criteria: Any
    ) -> None:
        """Targeted single-column UPDATE; extra *criteria* make it conditional."""
        result = await self.db.execute(
            update(self.model)
            .where(self._pk == entity_id, *criteria)
            .values({getattr(self.model, column): value})
        )
        if result.rowcount == 0:
            raise self._not_found()

    async def delete(self, entity_id: str, *criteria: Any) -> None:
        result = await self.db.execute(
            delete(self.model).where(self._pk == entity_id, *criteria)
        )
        if result.rowcount == 0:
            raise self._not_found()
