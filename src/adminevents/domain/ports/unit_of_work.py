"""Unit-of-work boundary for admin event reads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from adminevents.domain.ports.persistence import AdminEventRepository


@dataclass(frozen=True, slots=True)
class AdminEventRepositories:
    """Repositories bound to one open unit of work."""

    events: AdminEventRepository


@runtime_checkable
class AdminEventUnitOfWork(Protocol):
    """Transaction scope in which every repository read observes the same snapshot."""

    @property
    def repositories(self) -> AdminEventRepositories: ...

    def __enter__(self) -> AdminEventUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
