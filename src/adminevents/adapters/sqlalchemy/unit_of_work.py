"""SQLAlchemy-backed unit of work providing snapshot-consistent reads."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Literal, Self

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from adminevents.adapters.sqlalchemy.mappings import create_all_tables, start_mappers
from adminevents.adapters.sqlalchemy.repositories import SqlAlchemyAdminEventRepository
from adminevents.config import get_database_config
from adminevents.domain.ports.unit_of_work import AdminEventRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Connection, Engine

    from adminevents.config import DatabaseConfig

log = logging.getLogger(__name__)

SQLITE_PRAGMAS = (
    # WAL lets a reader keep its snapshot while a writer commits.
    "PRAGMA journal_mode=WAL",
    "PRAGMA foreign_keys=ON",
    "PRAGMA busy_timeout=5000",
)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    session_factory: sessionmaker[Session] | None = None


_STATE = _AdapterState()


def _begin_sqlite_snapshot(connection: Connection) -> None:
    driver_connection: Any = connection.connection.driver_connection
    # pysqlite defers BEGIN until the first write, leaving plain reads unisolated.
    driver_connection.isolation_level = None
    # Runs on every transaction, including pooled connections opened before startup().
    cursor = driver_connection.cursor()
    try:
        for pragma in SQLITE_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()
    connection.exec_driver_sql("BEGIN")


def configure_snapshot_reads(engine: Engine) -> None:
    """Make every transaction on a SQLite ``engine`` start an explicit read snapshot.

    The hook also applies the connection PRAGMAs (WAL, foreign keys, busy timeout)
    right before each ``BEGIN``, so it is safe to call on an engine that already has
    pooled connections. Other backends rely on the isolation level passed to
    ``create_engine``.
    """

    if engine.dialect.name != "sqlite":
        return
    if event.contains(engine, "begin", _begin_sqlite_snapshot):
        return
    event.listen(engine, "begin", _begin_sqlite_snapshot)


def create_configured_engine(config: DatabaseConfig) -> Engine:
    """Create an engine for ``config`` with snapshot reads enabled."""

    options: dict[str, Any] = {"future": True}
    if config.isolation_level is not None and not config.is_sqlite:
        options["isolation_level"] = config.isolation_level
    engine = create_engine(config.uri, **options)
    configure_snapshot_reads(engine)
    return engine


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, metadata, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    if engine is None:
        config = get_database_config()
        if database_uri is not None:
            config = replace(config, uri=database_uri)
        engine = create_configured_engine(config)
    else:
        configure_snapshot_reads(engine)

    start_mappers()
    create_all_tables(engine)
    log.info("Admin event store adapter started (dialect=%s)", engine.dialect.name)
    _STATE.engine = engine
    _STATE.session_factory = sessionmaker(bind=engine, expire_on_commit=False)


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None
    _STATE.session_factory = None


class SqlAlchemyAdminEventUnitOfWork:
    """One session, and therefore one read snapshot, per ``with`` block."""

    def __init__(self) -> None:
        if _STATE.session_factory is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call adminevents.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        self._session_factory = _STATE.session_factory
        self._session: Session | None = None
        self._repositories: AdminEventRepositories | None = None

    def __enter__(self) -> Self:
        if self._session is not None:
            raise StartupError("Unit of work session already open")
        self._session = self._session_factory()
        self._repositories = AdminEventRepositories(
            events=SqlAlchemyAdminEventRepository(self._session)
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        try:
            if exc_type is not None:
                self.rollback()
        finally:
            self.session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not open")
        return self._session

    @property
    def repositories(self) -> AdminEventRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work session not open")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from adminevents.domain.ports.unit_of_work import AdminEventUnitOfWork

    _uow_check: AdminEventUnitOfWork = SqlAlchemyAdminEventUnitOfWork()
