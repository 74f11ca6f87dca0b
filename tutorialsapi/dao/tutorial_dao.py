"""TutorialDAO — tutorials table operations."""

import uuid
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tutorialsapi.dao.base import BaseDAO, durable
from tutorialsapi.models.tutorial import Tutorial
from tutorialsapi.services import NotFoundError, ValidationError

UPDATABLE_FIELDS = ("title", "description", "published")


def _require_title(title: str | None) -> str:
    if title is None or not title.strip():
        raise ValidationError("title can not be empty")
    return title


class TutorialDAO(BaseDAO[Tutorial]):
    model = Tutorial

    # ── read ──────────────────────────────────────────────────────────────

    def _ordered(self):
        return select(Tutorial).order_by(Tutorial.created_at, Tutorial.id)

    async def find_all(self, session: AsyncSession) -> list[Tutorial]:
        """Return every tutorial in a stable (created_at, id) order."""
        return await self.fetch_all(session, self._ordered())

    async def find_by_id(self, session: AsyncSession, tutorial_id: uuid.UUID) -> Tutorial:
        tutorial = await self.get_by_id(session, tutorial_id)
        if tutorial is None:
            raise NotFoundError(f"tutorial {tutorial_id} not found")
        return tutorial

    async def find_by_filter(
        self,
        session: AsyncSession,
        *,
        title: str | None = None,
        published: bool | None = None,
    ) -> list[Tutorial]:
        """Filter by case-insensitive title substring and/or published flag.

        Both filters are AND-combined; with neither this is :meth:`find_all`.
        ``%`` and ``_`` in *title* match literally.
        """
        if title is None and published is None:
            return await self.find_all(session)
        query = self._ordered()
        if title is not None:
            query = query.where(Tutorial.title.icontains(title, autoescape=True))
        if published is not None:
            query = query.where(Tutorial.published == published)
        return await self.fetch_all(session, query)

    # ── write ─────────────────────────────────────────────────────────────

    async def create(
        self,
        session: AsyncSession,
        *,
        title: str | None,
        description: str | None = "",
        published: bool = False,
    ) -> Tutorial:
        """Insert a tutorial with a fresh id.

        Raises :class:`ValidationError` if *title* is missing or blank.
        """
        return await super().create(
            session,
            id=uuid.uuid4(),
            title=_require_title(title),
            description=description or "",
            published=bool(published),
        )

    async def update_by_id(
        self, session: AsyncSession, tutorial_id: uuid.UUID, **changes: Any
    ) -> Tutorial:
        """Apply only the given fields; the rest keep their stored values.

        ``description=None`` clears the description. Raises
        :class:`ValidationError` when the title would become empty, when
        ``published`` is not a bool, or for a field outside
        ``title``/``description``/``published``; :class:`NotFoundError`
        when the id does not exist.
        """
        for key in changes:
            if key not in UPDATABLE_FIELDS:
                raise ValidationError(f"'{key}' can not be updated")
        if "title" in changes:
            _require_title(changes["title"])
        if "description" in changes and changes["description"] is None:
            changes["description"] = ""
        if "published" in changes and not isinstance(changes["published"], bool):
            raise ValidationError("published must be true or false")

        tutorial = await self.update(session, tutorial_id, **changes)
        if tutorial is None:
            raise NotFoundError(f"tutorial {tutorial_id} not found")
        return tutorial

    async def delete_by_id(self, session: AsyncSession, tutorial_id: uuid.UUID) -> None:
        if not await self.delete(session, tutorial_id):
            raise NotFoundError(f"tutorial {tutorial_id} not found")

    async def delete_all(self, session: AsyncSession) -> int:
        """Remove every tutorial and return how many rows went away."""
        with durable("delete tutorials"):
            result = await session.execute(delete(Tutorial))
            await session.flush()
        return result.rowcount or 0
