"""Public domain model surface."""

from __future__ import annotations

from adminevents.domain.model.circuit import (
    Argument,
    ProposedCircuit,
    ProposedCircuitBuilder,
    ProposedNode,
    ProposedNodeBuilder,
    ProposedService,
    ProposedServiceBuilder,
)
from adminevents.domain.model.enums import (
    AuthorizationType,
    DurabilityType,
    EventType,
    PersistenceType,
    ProposalType,
    RouteType,
    Vote,
)
from adminevents.domain.model.errors import InvalidStateError
from adminevents.domain.model.event import AdminServiceEvent
from adminevents.domain.model.proposal import (
    CircuitProposal,
    CircuitProposalBuilder,
    VoteRecord,
)

__all__ = [  # noqa: RUF022
    # events
    "AdminServiceEvent",
    # proposals
    "CircuitProposal",
    "CircuitProposalBuilder",
    "VoteRecord",
    # circuits
    "Argument",
    "ProposedCircuit",
    "ProposedCircuitBuilder",
    "ProposedNode",
    "ProposedNodeBuilder",
    "ProposedService",
    "ProposedServiceBuilder",
    # enums
    "AuthorizationType",
    "DurabilityType",
    "EventType",
    "PersistenceType",
    "ProposalType",
    "RouteType",
    "Vote",
    # errors
    "InvalidStateError",
]
