"""Domain enums. Member values are the codes persisted by the event store."""

from __future__ import annotations

from enum import StrEnum


class EventType(StrEnum):
    PROPOSAL_SUBMITTED = "ProposalSubmitted"
    PROPOSAL_VOTE = "ProposalVote"
    PROPOSAL_ACCEPTED = "ProposalAccepted"
    PROPOSAL_REJECTED = "ProposalRejected"
    CIRCUIT_READY = "CircuitReady"
    CIRCUIT_DISBANDED = "CircuitDisbanded"

    @property
    def carries_requester(self) -> bool:
        """Vote outcomes record the public key of the node that triggered them."""
        return self in _REQUESTER_EVENT_TYPES


_REQUESTER_EVENT_TYPES = frozenset(
    {EventType.PROPOSAL_VOTE, EventType.PROPOSAL_ACCEPTED, EventType.PROPOSAL_REJECTED}
)


class ProposalType(StrEnum):
    CREATE = "Create"
    UPDATE_ROSTER = "UpdateRoster"
    ADD_NODE = "AddNode"
    REMOVE_NODE = "RemoveNode"
    DISBAND = "Disband"


class AuthorizationType(StrEnum):
    TRUST = "Trust"
    CHALLENGE = "Challenge"


class PersistenceType(StrEnum):
    ANY = "Any"


class DurabilityType(StrEnum):
    NO_DURABILITY = "NoDurability"


class RouteType(StrEnum):
    ANY = "Any"


class Vote(StrEnum):
    ACCEPT = "Accept"
    REJECT = "Reject"
