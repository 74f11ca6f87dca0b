"""Tests for TutorialService."""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from tutorialsapi.dao.tutorial_dao import TutorialDAO
from tutorialsapi.models.tutorial import Tutorial
from tutorialsapi.services import DurableMediumError, NotFoundError, ValidationError
from tutorialsapi.services import tutorial_service
from tutorialsapi.services.outcome import OutcomeKind
from tutorialsapi.services.tutorial_service import (
    UNSET,
    CreateTutorialInput,
    TutorialChanges,
    TutorialService,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_tutorial(**overrides) -> Tutorial:
    defaults = {
        "id": uuid.uuid4(),
        "title": "Learn X",
        "description": "",
        "published": False,
        "created_at": datetime.now(timezone.utc),
        "updated_at": datetime.now(timezone.utc),
    }
    defaults.update(overrides)
    return Tutorial(**defaults)


def _make_service() -> tuple[TutorialService, TutorialDAO]:
    dao = TutorialDAO()
    return TutorialService(dao), dao


# ---------------------------------------------------------------------------
# TutorialChanges
# ---------------------------------------------------------------------------


class TestTutorialChanges:
    def test_nothing_provided(self):
        assert TutorialChanges().provided() == {}

    def test_absent_differs_from_empty(self):
        changes = TutorialChanges(title="", published=UNSET)
        assert changes.provided() == {"title": ""}

    def test_none_counts_as_present(self):
        assert TutorialChanges(description=None).provided() == {"description": None}


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


class TestCreate:
    async def test_create_success(self):
        tut = _make_tutorial()
        service, dao = _make_service()
        dao.create = AsyncMock(return_value=tut)

        outcome = await service.handle_create(
            AsyncMock(), CreateTutorialInput(title="Learn X", description="d", published=True)
        )

        assert outcome.ok
        assert outcome.value is tut
        assert outcome.status_code == 200
        dao.create.assert_awaited_once()
        kwargs = dao.create.call_args.kwargs
        assert kwargs == {"title": "Learn X", "description": "d", "published": True}

    @pytest.mark.parametrize("title", [None, "", "   "])
    async def test_missing_title_never_reaches_store(self, title):
        service, dao = _make_service()
        dao.create = AsyncMock()

        outcome = await service.handle_create(AsyncMock(), CreateTutorialInput(title=title))

        assert outcome.kind is OutcomeKind.VALIDATION_ERROR
        assert outcome.status_code == 400
        assert outcome.message == "title can not be empty"
        dao.create.assert_not_awaited()

    async def test_store_unavailable(self):
        service, dao = _make_service()
        dao.create = AsyncMock(side_effect=DurableMediumError("insert tutorials failed"))

        outcome = await service.handle_create(AsyncMock(), CreateTutorialInput(title="t"))

        assert outcome.kind is OutcomeKind.SERVER_ERROR
        assert outcome.status_code == 500

    async def test_create_commits_before_success(self):
        service, dao = _make_service()
        dao.create = AsyncMock(return_value=_make_tutorial())
        session = AsyncMock()

        outcome = await service.handle_create(session, CreateTutorialInput(title="t"))

        assert outcome.ok
        session.commit.assert_awaited_once()

    async def test_commit_failure_is_server_error(self):
        service, dao = _make_service()
        dao.create = AsyncMock(return_value=_make_tutorial())
        dao.commit = AsyncMock(side_effect=DurableMediumError("commit tutorials failed"))

        outcome = await service.handle_create(AsyncMock(), CreateTutorialInput(title="t"))

        assert outcome.kind is OutcomeKind.SERVER_ERROR
        assert outcome.message == "commit tutorials failed"


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


class TestList:
    async def test_list_all(self):
        tuts = [_make_tutorial(), _make_tutorial()]
        service, dao = _make_service()
        dao.find_all = AsyncMock(return_value=tuts)
        dao.find_by_filter = AsyncMock()

        outcome = await service.handle_list(AsyncMock())

        assert outcome.ok
        assert outcome.value == tuts
        dao.find_by_filter.assert_not_awaited()

    async def test_list_by_title(self):
        service, dao = _make_service()
        dao.find_by_filter = AsyncMock(return_value=[])

        session = AsyncMock()
        await service.handle_list(session, title="web")

        dao.find_by_filter.assert_awaited_once_with(session, title="web")

    async def test_empty_title_means_no_filter(self):
        service, dao = _make_service()
        dao.find_all = AsyncMock(return_value=[])
        dao.find_by_filter = AsyncMock()

        await service.handle_list(AsyncMock(), title="")

        dao.find_all.assert_awaited_once()
        dao.find_by_filter.assert_not_awaited()

    async def test_list_published_uses_filter(self):
        pub = _make_tutorial(published=True)
        service, dao = _make_service()
        dao.find_by_filter = AsyncMock(return_value=[pub])

        session = AsyncMock()
        outcome = await service.handle_list_published(session)

        assert outcome.value == [pub]
        dao.find_by_filter.assert_awaited_once_with(session, published=True)

    async def test_list_store_unavailable(self):
        service, dao = _make_service()
        dao.find_all = AsyncMock(side_effect=DurableMediumError("select tutorials failed"))

        outcome = await service.handle_list(AsyncMock())

        assert outcome.kind is OutcomeKind.SERVER_ERROR


# ---------------------------------------------------------------------------
# get
# ---------------------------------------------------------------------------


class TestGet:
    async def test_get_success(self):
        tut = _make_tutorial()
        service, dao = _make_service()
        dao.find_by_id = AsyncMock(return_value=tut)

        outcome = await service.handle_get(AsyncMock(), str(tut.id))

        assert outcome.value is tut
        assert dao.find_by_id.call_args.args[1] == tut.id

    async def test_get_not_found(self):
        service, dao = _make_service()
        dao.find_by_id = AsyncMock(side_effect=NotFoundError("tutorial x not found"))

        outcome = await service.handle_get(AsyncMock(), uuid.uuid4())

        assert outcome.kind is OutcomeKind.NOT_FOUND
        assert outcome.status_code == 404

    async def test_malformed_id_is_not_found(self):
        service, dao = _make_service()
        dao.find_by_id = AsyncMock()

        outcome = await service.handle_get(AsyncMock(), "not-a-uuid")

        assert outcome.kind is OutcomeKind.NOT_FOUND
        assert "not-a-uuid" in outcome.message
        dao.find_by_id.assert_not_awaited()

    async def test_other_store_failure_is_server_error(self):
        service, dao = _make_service()
        dao.find_by_id = AsyncMock(side_effect=DurableMediumError("load tutorials failed"))

        outcome = await service.handle_get(AsyncMock(), uuid.uuid4())

        assert outcome.kind is OutcomeKind.SERVER_ERROR


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


class TestUpdate:
    async def test_update_passes_only_present_fields(self):
        tut = _make_tutorial(published=True)
        service, dao = _make_service()
        dao.update_by_id = AsyncMock(return_value=tut)

        outcome = await service.handle_update(
            AsyncMock(), str(tut.id), TutorialChanges(published=True)
        )

        assert outcome.value is tut
        assert dao.update_by_id.call_args.kwargs == {"published": True}

    async def test_empty_body_rejected(self):
        service, dao = _make_service()
        dao.update_by_id = AsyncMock()

        outcome = await service.handle_update(AsyncMock(), uuid.uuid4(), TutorialChanges())

        assert outcome.kind is OutcomeKind.VALIDATION_ERROR
        assert outcome.message == "data to update can not be empty"
        dao.update_by_id.assert_not_awaited()

    async def test_update_not_found(self):
        service, dao = _make_service()
        dao.update_by_id = AsyncMock(side_effect=NotFoundError("tutorial x not found"))

        outcome = await service.handle_update(
            AsyncMock(), uuid.uuid4(), TutorialChanges(title="t")
        )

        assert outcome.kind is OutcomeKind.NOT_FOUND

    async def test_update_store_validation_failure(self):
        service, dao = _make_service()
        dao.update_by_id = AsyncMock(side_effect=ValidationError("title can not be empty"))

        outcome = await service.handle_update(
            AsyncMock(), uuid.uuid4(), TutorialChanges(title="")
        )

        assert outcome.kind is OutcomeKind.VALIDATION_ERROR
        assert outcome.message == "title can not be empty"

    async def test_update_malformed_id(self):
        service, dao = _make_service()
        dao.update_by_id = AsyncMock()

        outcome = await service.handle_update(AsyncMock(), "42", TutorialChanges(title="t"))

        assert outcome.kind is OutcomeKind.NOT_FOUND
        dao.update_by_id.assert_not_awaited()


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


class TestDelete:
    async def test_delete_success(self):
        service, dao = _make_service()
        dao.delete_by_id = AsyncMock(return_value=None)

        outcome = await service.handle_delete(AsyncMock(), str(uuid.uuid4()))

        assert outcome.ok
        assert outcome.value == 1

    async def test_delete_not_found(self):
        service, dao = _make_service()
        dao.delete_by_id = AsyncMock(side_effect=NotFoundError("tutorial x not found"))

        outcome = await service.handle_delete(AsyncMock(), uuid.uuid4())

        assert outcome.kind is OutcomeKind.NOT_FOUND

    async def test_delete_all(self):
        service, dao = _make_service()
        dao.delete_all = AsyncMock(return_value=7)

        outcome = await service.handle_delete_all(AsyncMock())

        assert outcome.ok
        assert outcome.value == 7


# ---------------------------------------------------------------------------
# End-to-end against the real store
# ---------------------------------------------------------------------------


class TestLifecycle:
    async def test_create_publish_list_delete(self, session):
        service = TutorialService(TutorialDAO())

        created = await service.handle_create(
            session, CreateTutorialInput(title="Learn X", published=False)
        )
        assert created.ok
        tutorial_id = str(created.value.id)

        updated = await service.handle_update(
            session, tutorial_id, TutorialChanges(published=True)
        )
        assert updated.ok
        assert updated.value.title == "Learn X"
        assert updated.value.published is True

        published = await service.handle_list_published(session)
        assert tutorial_id in {str(t.id) for t in published.value}

        deleted = await service.handle_delete(session, tutorial_id)
        assert deleted.ok

        fetched = await service.handle_get(session, tutorial_id)
        assert fetched.kind is OutcomeKind.NOT_FOUND

    async def test_delete_all_twice(self, session):
        service = TutorialService(TutorialDAO())
        for title in ("a", "b"):
            await service.handle_create(session, CreateTutorialInput(title=title))

        first = await service.handle_delete_all(session)
        second = await service.handle_delete_all(session)

        assert first.value == 2
        assert second.value == 0
        assert (await service.handle_list(session)).value == []


# ---------------------------------------------------------------------------
# Logging of rejected requests
# ---------------------------------------------------------------------------


class TestRejectionLogging:
    @pytest.fixture
    def log(self, monkeypatch):
        mock_log = MagicMock()
        monkeypatch.setattr(tutorial_service, "log", mock_log)
        return mock_log

    async def test_empty_update_logged(self, log):
        service, _ = _make_service()

        await service.handle_update(AsyncMock(), uuid.uuid4(), TutorialChanges())

        log.info.assert_called_once_with(
            "tutorial request rejected",
            operation="update",
            reason="data to update can not be empty",
        )

    @pytest.mark.parametrize("operation", ["get", "update", "delete"])
    async def test_malformed_id_logged(self, log, operation):
        service, _ = _make_service()
        calls = {
            "get": lambda: service.handle_get(AsyncMock(), "nope"),
            "update": lambda: service.handle_update(
                AsyncMock(), "nope", TutorialChanges(title="t")
            ),
            "delete": lambda: service.handle_delete(AsyncMock(), "nope"),
        }

        await calls[operation]()

        log.info.assert_called_once_with(
            "tutorial request rejected",
            operation=operation,
            reason="tutorial nope not found",
        )

    async def test_store_unavailable_logged_at_error(self, log):
        service, dao = _make_service()
        dao.delete_all = AsyncMock(side_effect=DurableMediumError("delete tutorials failed"))

        await service.handle_delete_all(AsyncMock())

        log.error.assert_called_once()
        log.info.assert_not_called()
