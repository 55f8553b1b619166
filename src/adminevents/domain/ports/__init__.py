"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import AdminEventRepository
from .unit_of_work import AdminEventRepositories, AdminEventUnitOfWork

__all__ = [
    "AdminEventRepositories",
    "AdminEventRepository",
    "AdminEventUnitOfWork",
]
