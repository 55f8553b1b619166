"""Persistence row models, one per admin event table.

These mirror the stored columns verbatim (enumerations stay as raw codes) and are
only ever handed to the decoders in :mod:`adminevents.adapters.sqlalchemy.conversions`.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False, kw_only=True)
class AdminServiceEventModel:
    id: int
    event_type: str
    data: bytes | None = None


@dataclass(eq=False, kw_only=True)
class AdminEventCircuitProposalModel:
    event_id: int
    proposal_type: str
    circuit_id: str
    circuit_hash: str
    requester: bytes
    requester_node_id: str


@dataclass(eq=False, kw_only=True)
class AdminEventProposedCircuitModel:
    event_id: int
    circuit_id: str
    authorization_type: str
    persistence: str
    durability: str
    routes: str
    circuit_management_type: str
    application_metadata: bytes | None = None
    comments: str | None = None
    display_name: str | None = None


@dataclass(eq=False, kw_only=True)
class AdminEventProposedServiceModel:
    event_id: int
    service_id: str
    service_type: str
    node_id: str


@dataclass(eq=False, kw_only=True)
class AdminEventProposedServiceArgumentModel:
    id: int | None = None
    event_id: int
    service_id: str
    key: str
    value: str


@dataclass(eq=False, kw_only=True)
class AdminEventProposedNodeModel:
    event_id: int
    node_id: str


@dataclass(eq=False, kw_only=True)
class AdminEventProposedNodeEndpointModel:
    id: int | None = None
    event_id: int
    node_id: str
    endpoint: str


@dataclass(eq=False, kw_only=True)
class AdminEventVoteRecordModel:
    event_id: int
    public_key: bytes
    vote: str
    voter_node_id: str
