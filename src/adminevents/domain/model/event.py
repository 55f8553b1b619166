"""Administrative service events as returned by the event store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enums import EventType
    from .proposal import CircuitProposal


@dataclass(frozen=True, slots=True)
class AdminServiceEvent:
    """A stored admin event and the proposal it describes.

    ``requester`` is the public key of the node whose action produced the event.
    It is only present for vote, accept and reject events.
    """

    event_id: int
    event_type: EventType
    proposal: CircuitProposal
    requester: bytes | None = None

    def __post_init__(self) -> None:
        if self.event_type.carries_requester and self.requester is None:
            raise ValueError(f"{self.event_type} event requires a requester")
        if not self.event_type.carries_requester and self.requester is not None:
            raise ValueError(f"{self.event_type} event does not carry a requester")
