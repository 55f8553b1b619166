"""Ports for reading persisted admin events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from adminevents.domain.model import AdminServiceEvent


@runtime_checkable
class AdminEventRepository(Protocol):
    """Read contract for stored admin events."""

    def list_events(self, event_ids: Iterable[int]) -> list[AdminServiceEvent]:
        """Return the complete events among ``event_ids``, ascending by event id."""
        ...
