"""Proposed circuit definition: services, member nodes and policy flags.

The value objects are immutable. They are assembled through builders whose
``with_*`` setters may be called in any order; required fields are only checked
by the terminal ``build()`` call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Self, TypeAlias

from .enums import AuthorizationType, DurabilityType, PersistenceType, RouteType
from .errors import InvalidStateError

if TYPE_CHECKING:
    from collections.abc import Iterable

Argument: TypeAlias = tuple[str, str]


@dataclass(frozen=True, slots=True)
class ProposedService:
    service_id: str
    service_type: str
    node_id: str
    arguments: tuple[Argument, ...] = ()


@dataclass(frozen=True, slots=True)
class ProposedNode:
    node_id: str
    endpoints: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ProposedCircuit:
    circuit_id: str
    roster: tuple[ProposedService, ...]
    members: tuple[ProposedNode, ...]
    circuit_management_type: str
    authorization_type: AuthorizationType = AuthorizationType.TRUST
    persistence: PersistenceType = PersistenceType.ANY
    durability: DurabilityType = DurabilityType.NO_DURABILITY
    routes: RouteType = RouteType.ANY
    application_metadata: bytes | None = None
    comments: str | None = None
    display_name: str | None = None

    def service(self, service_id: str) -> ProposedService | None:
        for service in self.roster:
            if service.service_id == service_id:
                return service
        return None

    def member(self, node_id: str) -> ProposedNode | None:
        for node in self.members:
            if node.node_id == node_id:
                return node
        return None


class ProposedServiceBuilder:
    def __init__(self) -> None:
        self._service_id: str | None = None
        self._service_type: str | None = None
        self._node_id: str | None = None
        self._arguments: list[Argument] = []

    def with_service_id(self, service_id: str) -> Self:
        self._service_id = service_id
        return self

    def with_service_type(self, service_type: str) -> Self:
        self._service_type = service_type
        return self

    def with_node_id(self, node_id: str) -> Self:
        self._node_id = node_id
        return self

    def with_arguments(self, arguments: Iterable[Argument]) -> Self:
        self._arguments = [(key, value) for key, value in arguments]
        return self

    def build(self) -> ProposedService:
        if self._service_id is None:
            raise InvalidStateError.missing_field("service_id")
        if self._service_type is None:
            raise InvalidStateError.missing_field("service_type")
        if self._node_id is None:
            raise InvalidStateError.missing_field("node_id")
        return ProposedService(
            service_id=self._service_id,
            service_type=self._service_type,
            node_id=self._node_id,
            arguments=tuple(self._arguments),
        )


class ProposedNodeBuilder:
    def __init__(self) -> None:
        self._node_id: str | None = None
        self._endpoints: list[str] | None = None

    @property
    def endpoints(self) -> list[str] | None:
        """A copy of the endpoints set so far, or ``None`` if never set."""
        if self._endpoints is None:
            return None
        return list(self._endpoints)

    def with_node_id(self, node_id: str) -> Self:
        self._node_id = node_id
        return self

    def with_endpoints(self, endpoints: Iterable[str]) -> Self:
        self._endpoints = list(endpoints)
        return self

    def add_endpoint(self, endpoint: str) -> Self:
        if self._endpoints is None:
            self._endpoints = []
        self._endpoints.append(endpoint)
        return self

    def build(self) -> ProposedNode:
        if self._node_id is None:
            raise InvalidStateError.missing_field("node_id")
        if self._endpoints is None:
            raise InvalidStateError.missing_field("endpoints")
        return ProposedNode(node_id=self._node_id, endpoints=tuple(self._endpoints))


class ProposedCircuitBuilder:
    def __init__(self) -> None:
        self._circuit_id: str | None = None
        self._roster: tuple[ProposedService, ...] | None = None
        self._members: tuple[ProposedNode, ...] | None = None
        self._circuit_management_type: str | None = None
        self._authorization_type = AuthorizationType.TRUST
        self._persistence = PersistenceType.ANY
        self._durability = DurabilityType.NO_DURABILITY
        self._routes = RouteType.ANY
        self._application_metadata: bytes | None = None
        self._comments: str | None = None
        self._display_name: str | None = None

    def with_circuit_id(self, circuit_id: str) -> Self:
        self._circuit_id = circuit_id
        return self

    def with_roster(self, roster: Iterable[ProposedService]) -> Self:
        self._roster = tuple(roster)
        return self

    def with_members(self, members: Iterable[ProposedNode]) -> Self:
        self._members = tuple(members)
        return self

    def with_authorization_type(self, authorization_type: AuthorizationType) -> Self:
        self._authorization_type = authorization_type
        return self

    def with_persistence(self, persistence: PersistenceType) -> Self:
        self._persistence = persistence
        return self

    def with_durability(self, durability: DurabilityType) -> Self:
        self._durability = durability
        return self

    def with_routes(self, routes: RouteType) -> Self:
        self._routes = routes
        return self

    def with_circuit_management_type(self, circuit_management_type: str) -> Self:
        self._circuit_management_type = circuit_management_type
        return self

    def with_application_metadata(self, application_metadata: bytes) -> Self:
        self._application_metadata = application_metadata
        return self

    def with_comments(self, comments: str) -> Self:
        self._comments = comments
        return self

    def with_display_name(self, display_name: str) -> Self:
        self._display_name = display_name
        return self

    def build(self) -> ProposedCircuit:
        if self._circuit_id is None:
            raise InvalidStateError.missing_field("circuit_id")
        if self._roster is None:
            raise InvalidStateError.missing_field("roster")
        if self._members is None:
            raise InvalidStateError.missing_field("members")
        if self._circuit_management_type is None:
            raise InvalidStateError.missing_field("circuit_management_type")
        return ProposedCircuit(
            circuit_id=self._circuit_id,
            roster=self._roster,
            members=self._members,
            circuit_management_type=self._circuit_management_type,
            authorization_type=self._authorization_type,
            persistence=self._persistence,
            durability=self._durability,
            routes=self._routes,
            application_metadata=self._application_metadata,
            comments=self._comments,
            display_name=self._display_name,
        )
