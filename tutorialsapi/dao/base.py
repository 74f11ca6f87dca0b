"""Generic base DAO — CRUD (ORM) + row counts."""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tutorialsapi.core.database import Base
from tutorialsapi.services import DurableMediumError

ModelT = TypeVar("ModelT", bound=Base)


@contextmanager
def durable(operation: str) -> Iterator[None]:
    """Re-raise database and connection failures as :class:`DurableMediumError`."""
    try:
        yield
    except (SQLAlchemyError, OSError) as exc:
        raise DurableMediumError(f"{operation} failed: {type(exc).__name__}") from exc


class BaseDAO(Generic[ModelT]):
    """Base data-access object. Subclasses set ``model`` class attribute."""

    model: type[ModelT]

    # ── ORM methods ──────────────────────────────────────────────────────

    async def get_by_id(self, session: AsyncSession, pk: uuid.UUID) -> ModelT | None:
        with durable(f"load {self.model.__tablename__}"):
            return await session.get(self.model, pk)

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        obj = self.model(**values)
        with durable(f"insert {self.model.__tablename__}"):
            session.add(obj)
            await session.flush()
            await session.refresh(obj)
        return obj

    async def update(self, session: AsyncSession, pk: uuid.UUID, **values: Any) -> ModelT | None:
        """Set the given columns on row *pk*; return None if it does not exist."""
        with durable(f"update {self.model.__tablename__}"):
            obj = await session.get(self.model, pk)
            if obj is None:
                return None
            for key, val in values.items():
                setattr(obj, key, val)
            await session.flush()
            await session.refresh(obj)
        return obj

    async def delete(self, session: AsyncSession, pk: uuid.UUID) -> bool:
        with durable(f"delete {self.model.__tablename__}"):
            obj = await session.get(self.model, pk)
            if obj is None:
                return False
            await session.delete(obj)
            await session.flush()
        return True

    async def commit(self, session: AsyncSession) -> None:
        """Make the session's pending writes durable."""
        with durable(f"commit {self.model.__tablename__}"):
            await session.commit()

    async def fetch_all(self, session: AsyncSession, query: Select | None = None) -> list[ModelT]:
        """Run *query* (default: every row) and return the ORM objects."""
        if query is None:
            query = select(self.model)
        with durable(f"select {self.model.__tablename__}"):
            result = await session.execute(query)
            return list(result.scalars().all())

    async def count(self, session: AsyncSession, query: Select | None = None) -> int:
        """Return the row count for *query*, or total rows if query is None."""
        if query is None:
            query = select(func.count()).select_from(self.model.__table__)
        else:
            query = select(func.count()).select_from(query.subquery())

        with durable(f"count {self.model.__tablename__}"):
            result = await session.execute(query)
            return result.scalar_one()
