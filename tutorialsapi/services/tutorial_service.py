"""TutorialService — request validation and outcome mapping for tutorials."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, fields
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from tutorialsapi.dao.tutorial_dao import TutorialDAO
from tutorialsapi.models.tutorial import Tutorial
from tutorialsapi.services import DurableMediumError, ServiceError
from tutorialsapi.services.outcome import Outcome

log = structlog.get_logger("tutorialsapi.service")


class _Unset:
    """Marker for a field the caller did not send."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass
class CreateTutorialInput:
    """Input for creating a tutorial."""

    title: str | None
    description: str | None = None
    published: bool = False


@dataclass
class TutorialChanges:
    """Partial update. Fields left as ``UNSET`` are not touched.

    ``TutorialChanges(title="")`` is a present-but-empty title, which is
    rejected; ``TutorialChanges()`` carries nothing to update.
    """

    title: Any = UNSET
    description: Any = UNSET
    published: Any = UNSET

    def provided(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


def _parse_id(raw: str | uuid.UUID) -> uuid.UUID | None:
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        return None


def _rejected(operation: str, outcome: Outcome[Any]) -> Outcome[Any]:
    log.info("tutorial request rejected", operation=operation, reason=outcome.message)
    return outcome


def _not_found(operation: str, raw_id: object) -> Outcome[Any]:
    return _rejected(operation, Outcome.not_found(f"tutorial {raw_id} not found"))


class TutorialService:
    """Stateless service translating tutorial requests into DAO calls."""

    def __init__(self, tutorial_dao: TutorialDAO) -> None:
        self._tutorial_dao = tutorial_dao

    @staticmethod
    def _failed(operation: str, exc: ServiceError, **context: Any) -> Outcome[Any]:
        if isinstance(exc, DurableMediumError):
            log.error("tutorial store unavailable", operation=operation, error=str(exc), **context)
        else:
            log.info("tutorial request rejected", operation=operation, reason=str(exc), **context)
        return Outcome.from_error(exc)

    async def handle_create(
        self, session: AsyncSession, data: CreateTutorialInput
    ) -> Outcome[Tutorial]:
        if data.title is None or not data.title.strip():
            return _rejected("create", Outcome.validation_error("title can not be empty"))
        try:
            tutorial = await self._tutorial_dao.create(
                session,
                title=data.title,
                description=data.description,
                published=data.published,
            )
            await self._tutorial_dao.commit(session)
        except ServiceError as exc:
            return self._failed("create", exc)
        log.info("tutorial created", tutorial_id=str(tutorial.id))
        return Outcome.success(tutorial)

    async def handle_list(
        self,
        session: AsyncSession,
        *,
        title: str | None = None,
        published: bool | None = None,
    ) -> Outcome[list[Tutorial]]:
        """List all tutorials, or those matching *title* / *published*.

        An empty *title* means no title filter.
        """
        try:
            if title:
                tutorials = await self._tutorial_dao.find_by_filter(session, title=title)
            elif published is not None:
                tutorials = await self._tutorial_dao.find_by_filter(session, published=published)
            else:
                tutorials = await self._tutorial_dao.find_all(session)
        except ServiceError as exc:
            return self._failed("list", exc)
        return Outcome.success(tutorials)

    async def handle_list_published(self, session: AsyncSession) -> Outcome[list[Tutorial]]:
        return await self.handle_list(session, published=True)

    async def handle_get(
        self, session: AsyncSession, tutorial_id: str | uuid.UUID
    ) -> Outcome[Tutorial]:
        pk = _parse_id(tutorial_id)
        if pk is None:
            return _not_found("get", tutorial_id)
        try:
            tutorial = await self._tutorial_dao.find_by_id(session, pk)
        except ServiceError as exc:
            return self._failed("get", exc, tutorial_id=str(pk))
        return Outcome.success(tutorial)

    async def handle_update(
        self,
        session: AsyncSession,
        tutorial_id: str | uuid.UUID,
        changes: TutorialChanges,
    ) -> Outcome[Tutorial]:
        values = changes.provided()
        if not values:
            return _rejected(
                "update", Outcome.validation_error("data to update can not be empty")
            )
        pk = _parse_id(tutorial_id)
        if pk is None:
            return _not_found("update", tutorial_id)
        try:
            tutorial = await self._tutorial_dao.update_by_id(session, pk, **values)
            await self._tutorial_dao.commit(session)
        except ServiceError as exc:
            return self._failed("update", exc, tutorial_id=str(pk))
        log.info("tutorial updated", tutorial_id=str(pk), fields=sorted(values))
        return Outcome.success(tutorial)

    async def handle_delete(
        self, session: AsyncSession, tutorial_id: str | uuid.UUID
    ) -> Outcome[int]:
        pk = _parse_id(tutorial_id)
        if pk is None:
            return _not_found("delete", tutorial_id)
        try:
            await self._tutorial_dao.delete_by_id(session, pk)
            await self._tutorial_dao.commit(session)
        except ServiceError as exc:
            return self._failed("delete", exc, tutorial_id=str(pk))
        log.info("tutorial deleted", tutorial_id=str(pk))
        return Outcome.success(1)

    async def handle_delete_all(self, session: AsyncSession) -> Outcome[int]:
        try:
            removed = await self._tutorial_dao.delete_all(session)
            await self._tutorial_dao.commit(session)
        except ServiceError as exc:
            return self._failed("delete_all", exc)
        log.info("tutorials deleted", count=removed)
        return Outcome.success(removed)
