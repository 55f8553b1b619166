"""Circuit proposals and the votes cast on them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Self

from .errors import InvalidStateError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .circuit import ProposedCircuit
    from .enums import ProposalType, Vote


@dataclass(frozen=True, slots=True)
class VoteRecord:
    public_key: bytes
    vote: Vote
    voter_node_id: str


@dataclass(frozen=True, slots=True)
class CircuitProposal:
    proposal_type: ProposalType
    circuit_id: str
    circuit_hash: str
    circuit: ProposedCircuit
    requester: bytes
    requester_node_id: str
    votes: tuple[VoteRecord, ...] = ()


class CircuitProposalBuilder:
    def __init__(self) -> None:
        self._proposal_type: ProposalType | None = None
        self._circuit_id: str | None = None
        self._circuit_hash: str | None = None
        self._circuit: ProposedCircuit | None = None
        self._votes: tuple[VoteRecord, ...] = ()
        self._requester: bytes | None = None
        self._requester_node_id: str | None = None

    def with_proposal_type(self, proposal_type: ProposalType) -> Self:
        self._proposal_type = proposal_type
        return self

    def with_circuit_id(self, circuit_id: str) -> Self:
        self._circuit_id = circuit_id
        return self

    def with_circuit_hash(self, circuit_hash: str) -> Self:
        self._circuit_hash = circuit_hash
        return self

    def with_circuit(self, circuit: ProposedCircuit) -> Self:
        self._circuit = circuit
        return self

    def with_votes(self, votes: Iterable[VoteRecord]) -> Self:
        self._votes = tuple(votes)
        return self

    def with_requester(self, requester: bytes) -> Self:
        self._requester = requester
        return self

    def with_requester_node_id(self, requester_node_id: str) -> Self:
        self._requester_node_id = requester_node_id
        return self

    def build(self) -> CircuitProposal:
        if self._proposal_type is None:
            raise InvalidStateError.missing_field("proposal_type")
        if self._circuit_id is None:
            raise InvalidStateError.missing_field("circuit_id")
        if self._circuit_hash is None:
            raise InvalidStateError.missing_field("circuit_hash")
        if self._circuit is None:
            raise InvalidStateError.missing_field("circuit")
        if self._requester is None:
            raise InvalidStateError.missing_field("requester")
        if self._requester_node_id is None:
            raise InvalidStateError.missing_field("requester_node_id")
        return CircuitProposal(
            proposal_type=self._proposal_type,
            circuit_id=self._circuit_id,
            circuit_hash=self._circuit_hash,
            circuit=self._circuit,
            requester=self._requester,
            requester_node_id=self._requester_node_id,
            votes=self._votes,
        )
