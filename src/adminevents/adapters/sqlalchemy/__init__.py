"""SQLAlchemy adapter package for the admin event store."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import SqlAlchemyAdminEventRepository
from .unit_of_work import (
    SqlAlchemyAdminEventUnitOfWork,
    StartupError,
    configure_snapshot_reads,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyAdminEventRepository",
    "SqlAlchemyAdminEventUnitOfWork",
    "StartupError",
    "configure_snapshot_reads",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
