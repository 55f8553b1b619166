"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from functools import partial
from operator import attrgetter
from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar, cast

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError

from adminevents.adapters.sqlalchemy.conversions import (
    admin_event_from_model,
    circuit_builder_from_model,
    proposal_builder_from_model,
    vote_record_from_model,
)
from adminevents.adapters.sqlalchemy.mappings import (
    admin_event_circuit_proposal_table,
    admin_event_proposed_circuit_table,
    admin_event_proposed_node_endpoint_table,
    admin_event_proposed_node_table,
    admin_event_proposed_service_argument_table,
    admin_event_proposed_service_table,
    admin_event_vote_record_table,
    admin_service_event_table,
)
from adminevents.adapters.sqlalchemy.models import (
    AdminEventCircuitProposalModel,
    AdminEventProposedCircuitModel,
    AdminEventProposedNodeModel,
    AdminEventProposedServiceArgumentModel,
    AdminEventProposedServiceModel,
    AdminEventVoteRecordModel,
    AdminServiceEventModel,
)
from adminevents.domain.errors import StorageError, ValidationError
from adminevents.domain.model import (
    InvalidStateError,
    ProposedNodeBuilder,
    ProposedServiceBuilder,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from sqlalchemy import Row, Select
    from sqlalchemy.orm import Session

    from adminevents.domain.model import (
        AdminServiceEvent,
        Argument,
        CircuitProposalBuilder,
        ProposedCircuitBuilder,
        ProposedNode,
        ProposedService,
        VoteRecord,
    )

log = logging.getLogger(__name__)

_ChildKey: TypeAlias = tuple[int, str]


@dataclass(slots=True)
class _EventSeed:
    """An event row and the partially filled builders for its one-to-one children."""

    event: AdminServiceEventModel
    proposal: CircuitProposalBuilder
    circuit: ProposedCircuitBuilder


T = TypeVar("T")


def _finalize(build: Callable[[], T]) -> T:
    try:
        return build()
    except InvalidStateError as exc:
        raise ValidationError(str(exc)) from exc


class SqlAlchemyAdminEventRepository:
    """Reassemble admin events from their normalised rows.

    Every query runs on the repository's session, so all stages read from the
    transaction (and snapshot) opened by the surrounding unit of work.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_events(self, event_ids: Iterable[int]) -> list[AdminServiceEvent]:
        requested = sorted(set(event_ids))
        if not requested:
            return []

        seeds = self._load_event_seeds(requested)
        services = self._load_services(requested)
        nodes = self._load_nodes(requested)
        votes = self._load_votes(requested)

        events = [
            self._assemble(
                seed,
                services.get(event_id),
                nodes.get(event_id),
                votes.get(event_id),
            )
            for event_id, seed in seeds.items()
        ]
        events.sort(key=attrgetter("event_id"))
        return events

    def _load_event_seeds(self, event_ids: Sequence[int]) -> dict[int, _EventSeed]:
        stmt = (
            select(
                AdminServiceEventModel,
                AdminEventCircuitProposalModel,
                AdminEventProposedCircuitModel,
            )
            .join(
                AdminEventCircuitProposalModel,
                admin_event_circuit_proposal_table.c.event_id == admin_service_event_table.c.id,
            )
            .join(
                AdminEventProposedCircuitModel,
                admin_event_proposed_circuit_table.c.event_id == admin_service_event_table.c.id,
            )
            .where(admin_service_event_table.c.id.in_(event_ids))
        )
        seeds: dict[int, _EventSeed] = {}
        for event, proposal, circuit in self._rows(stmt):
            seeds[event.id] = _EventSeed(
                event=event,
                proposal=proposal_builder_from_model(proposal),
                circuit=circuit_builder_from_model(circuit),
            )
        log.debug("Loaded %d of %d requested events", len(seeds), len(event_ids))
        return seeds

    def _load_services(self, event_ids: Sequence[int]) -> dict[int, list[ProposedService]]:
        services = admin_event_proposed_service_table.c
        arguments = admin_event_proposed_service_argument_table.c
        stmt = (
            select(AdminEventProposedServiceModel, AdminEventProposedServiceArgumentModel)
            .outerjoin(
                AdminEventProposedServiceArgumentModel,
                and_(
                    arguments.event_id == services.event_id,
                    arguments.service_id == services.service_id,
                ),
            )
            .where(services.event_id.in_(event_ids))
            .order_by(services.event_id, services.service_id, arguments.id)
        )

        builders: dict[_ChildKey, ProposedServiceBuilder] = {}
        arguments_by_service: dict[_ChildKey, list[Argument]] = defaultdict(list)
        for service, argument in self._rows(stmt):
            key = (service.event_id, service.service_id)
            if argument is not None:
                arguments_by_service[key].append((argument.key, argument.value))
            if key not in builders:
                builders[key] = (
                    ProposedServiceBuilder()
                    .with_service_id(service.service_id)
                    .with_service_type(service.service_type)
                    .with_node_id(service.node_id)
                )

        grouped: dict[int, list[ProposedService]] = defaultdict(list)
        for (event_id, service_id), builder in builders.items():
            service_arguments = arguments_by_service.get((event_id, service_id))
            if service_arguments:
                builder.with_arguments(service_arguments)
            grouped[event_id].append(_finalize(builder.build))
        log.debug("Built %d proposed services", len(builders))
        return grouped

    def _load_nodes(self, event_ids: Sequence[int]) -> dict[int, list[ProposedNode]]:
        nodes = admin_event_proposed_node_table.c
        endpoints = admin_event_proposed_node_endpoint_table.c
        stmt = (
            select(AdminEventProposedNodeModel, endpoints.endpoint)
            .join(
                admin_event_proposed_node_endpoint_table,
                and_(
                    endpoints.event_id == nodes.event_id,
                    endpoints.node_id == nodes.node_id,
                ),
            )
            .where(nodes.event_id.in_(event_ids))
            .order_by(nodes.event_id, nodes.node_id, endpoints.id)
        )

        builders: dict[_ChildKey, ProposedNodeBuilder] = {}
        for node, endpoint in self._rows(stmt):
            key = (node.event_id, node.node_id)
            if key not in builders:
                builders[key] = ProposedNodeBuilder().with_node_id(node.node_id)
            builders[key].add_endpoint(endpoint)

        grouped: dict[int, list[ProposedNode]] = defaultdict(list)
        for (event_id, _), builder in builders.items():
            grouped[event_id].append(_finalize(builder.build))
        log.debug("Built %d proposed nodes", len(builders))
        return grouped

    def _load_votes(self, event_ids: Sequence[int]) -> dict[int, list[VoteRecord]]:
        votes = admin_event_vote_record_table.c
        stmt = (
            select(AdminEventVoteRecordModel)
            .where(votes.event_id.in_(event_ids))
            .order_by(votes.event_id, votes.voter_node_id)
        )

        grouped: dict[int, list[VoteRecord]] = defaultdict(list)
        count = 0
        for (vote,) in self._rows(stmt):
            grouped[vote.event_id].append(_finalize(partial(vote_record_from_model, vote)))
            count += 1
        log.debug("Loaded %d vote records", count)
        return grouped

    def _assemble(
        self,
        seed: _EventSeed,
        services: list[ProposedService] | None,
        nodes: list[ProposedNode] | None,
        votes: list[VoteRecord] | None,
    ) -> AdminServiceEvent:
        if services:
            seed.circuit.with_roster(services)
        if nodes:
            seed.circuit.with_members(nodes)
        circuit = _finalize(seed.circuit.build)

        seed.proposal.with_circuit(circuit)
        if votes:
            seed.proposal.with_votes(votes)
        proposal = _finalize(seed.proposal.build)

        return admin_event_from_model(seed.event, proposal)

    def _rows(self, stmt: Select[Any]) -> Sequence[Row[Any]]:
        try:
            return cast("Sequence[Row[Any]]", self.session.execute(stmt).all())
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to read admin events: {exc}") from exc


if TYPE_CHECKING:
    from adminevents.domain.ports.persistence import AdminEventRepository

    _session_stub = cast("Session", object())
    _repo_check: AdminEventRepository = SqlAlchemyAdminEventRepository(_session_stub)
