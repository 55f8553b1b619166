"""Application entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from adminevents.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyAdminEventUnitOfWork,
    is_started,
    startup,
)
from adminevents.domain.ports.unit_of_work import AdminEventUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from adminevents.domain.model import AdminServiceEvent

UnitOfWorkFactory = Callable[[], AdminEventUnitOfWork]


log = getLogger(__name__)


def list_events(
    event_ids: Iterable[int],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Iterator[AdminServiceEvent]:
    """Return the stored admin events among ``event_ids`` in ascending id order.

    Identifiers without a stored event, proposal and proposed circuit are skipped.
    The whole result is read inside one transaction and fully materialised before
    it is returned; any failure rolls back and raises instead of yielding a partial
    list. Call again to re-run the read.

    Raises:
        StorageError: the database read failed.
        ConversionError: a stored code or event row could not be decoded.
        ValidationError: a reconstructed object was missing a required field.
    """

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyAdminEventUnitOfWork

    requested = list(event_ids)
    log.info("Listing admin events: requested=%d", len(requested))

    with unit_of_work_factory() as uow:
        events = uow.repositories.events.list_events(requested)
        uow.commit()

    log.info("Listed admin events: returned=%d", len(events))
    return iter(events)
