from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Literal

import pytest

from adminevents import app
from adminevents.adapters.sqlalchemy.unit_of_work import is_started, shutdown
from adminevents.domain.errors import StorageError
from adminevents.domain.ports.unit_of_work import AdminEventRepositories
from tests.helpers.admin_events import seed_event

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import TracebackType

    from sqlalchemy.engine import Engine

    from adminevents.adapters.sqlalchemy import SqlAlchemyAdminEventUnitOfWork
    from adminevents.domain.model import AdminServiceEvent
    from adminevents.domain.ports.persistence import AdminEventRepository


class FailingRepository:
    def list_events(self, event_ids: Iterable[int]) -> list[AdminServiceEvent]:
        raise StorageError(f"unreachable store for {list(event_ids)}")


class RecordingRepository:
    def __init__(self) -> None:
        self.calls: list[list[int]] = []

    def list_events(self, event_ids: Iterable[int]) -> list[AdminServiceEvent]:
        self.calls.append(list(event_ids))
        return []


class RecordingUnitOfWork:
    def __init__(self, events: AdminEventRepository | None = None) -> None:
        self._repositories = AdminEventRepositories(events=events or FailingRepository())
        self.committed = False
        self.rolled_back = False

    @property
    def repositories(self) -> AdminEventRepositories:
        return self._repositories

    def __enter__(self) -> RecordingUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True


@pytest.fixture
def reset_adapter() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_list_events_returns_iterator_in_id_order(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyAdminEventUnitOfWork],
) -> None:
    with sqlite_engine.begin() as connection:
        for event_id in (8, 3, 5):
            seed_event(connection, event_id)

    result = app.list_events([8, 3, 99, 5], unit_of_work_factory=sqlite_unit_of_work)

    assert isinstance(result, Iterator)
    assert [event.event_id for event in result] == [3, 5, 8]


def test_list_events_accepts_generators(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyAdminEventUnitOfWork],
) -> None:
    with sqlite_engine.begin() as connection:
        seed_event(connection, 1)
        seed_event(connection, 2)

    result = app.list_events(
        (event_id for event_id in (2, 1)), unit_of_work_factory=sqlite_unit_of_work
    )

    assert [event.event_id for event in result] == [1, 2]


def test_list_events_with_no_ids(
    sqlite_unit_of_work: Callable[[], SqlAlchemyAdminEventUnitOfWork],
) -> None:
    assert list(app.list_events([], unit_of_work_factory=sqlite_unit_of_work)) == []


def test_list_events_commits_empty_request() -> None:
    repository = RecordingRepository()
    uow = RecordingUnitOfWork(repository)

    result = app.list_events([], unit_of_work_factory=lambda: uow)

    assert list(result) == []
    assert repository.calls == [[]]
    assert uow.committed is True
    assert uow.rolled_back is False


def test_list_events_rolls_back_on_failure() -> None:
    uow = RecordingUnitOfWork()

    with pytest.raises(StorageError, match="unreachable store"):
        app.list_events([1, 2], unit_of_work_factory=lambda: uow)

    assert uow.rolled_back is True
    assert uow.committed is False


@pytest.mark.usefixtures("reset_adapter")
def test_list_events_starts_default_adapter(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    monkeypatch.delenv("DATABASE_ISOLATION_LEVEL", raising=False)
    assert not is_started()

    result = list(app.list_events([1]))

    assert result == []
    assert is_started()


def test_list_events_logs_request_and_result_sizes(
    caplog: pytest.LogCaptureFixture,
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyAdminEventUnitOfWork],
) -> None:
    with sqlite_engine.begin() as connection:
        seed_event(connection, 1)

    with caplog.at_level(logging.INFO, logger="adminevents.app"):
        list(app.list_events([1, 1, 2], unit_of_work_factory=sqlite_unit_of_work))

    messages = [
        record.getMessage() for record in caplog.records if record.name == "adminevents.app"
    ]
    assert messages == ["Listing admin events: requested=3", "Listed admin events: returned=1"]
