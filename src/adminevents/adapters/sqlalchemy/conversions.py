"""Decode persistence row models into domain builders and objects."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, TypeVar

from adminevents.domain.errors import ConversionError
from adminevents.domain.model import (
    AdminServiceEvent,
    AuthorizationType,
    CircuitProposalBuilder,
    DurabilityType,
    EventType,
    InvalidStateError,
    PersistenceType,
    ProposalType,
    ProposedCircuitBuilder,
    RouteType,
    Vote,
    VoteRecord,
)

if TYPE_CHECKING:
    from adminevents.adapters.sqlalchemy.models import (
        AdminEventCircuitProposalModel,
        AdminEventProposedCircuitModel,
        AdminEventVoteRecordModel,
        AdminServiceEventModel,
    )
    from adminevents.domain.model import CircuitProposal


TEnum = TypeVar("TEnum", bound=StrEnum)


def decode_code(enum_cls: type[TEnum], code: str, *, field: str) -> TEnum:
    """Return the ``enum_cls`` member stored as ``code``.

    Raises:
        ConversionError: if ``code`` is not a known member value.
    """

    try:
        return enum_cls(code)
    except ValueError as exc:
        raise ConversionError(f"Unknown {field} code: {code!r}") from exc


def proposal_builder_from_model(model: AdminEventCircuitProposalModel) -> CircuitProposalBuilder:
    return (
        CircuitProposalBuilder()
        .with_proposal_type(decode_code(ProposalType, model.proposal_type, field="proposal type"))
        .with_circuit_id(model.circuit_id)
        .with_circuit_hash(model.circuit_hash)
        .with_requester(model.requester)
        .with_requester_node_id(model.requester_node_id)
    )


def circuit_builder_from_model(model: AdminEventProposedCircuitModel) -> ProposedCircuitBuilder:
    builder = (
        ProposedCircuitBuilder()
        .with_circuit_id(model.circuit_id)
        .with_authorization_type(
            decode_code(AuthorizationType, model.authorization_type, field="authorization type")
        )
        .with_persistence(decode_code(PersistenceType, model.persistence, field="persistence"))
        .with_durability(decode_code(DurabilityType, model.durability, field="durability"))
        .with_routes(decode_code(RouteType, model.routes, field="route type"))
        .with_circuit_management_type(model.circuit_management_type)
    )
    if model.application_metadata is not None:
        builder.with_application_metadata(model.application_metadata)
    if model.comments is not None:
        builder.with_comments(model.comments)
    if model.display_name is not None:
        builder.with_display_name(model.display_name)
    return builder


def vote_record_from_model(model: AdminEventVoteRecordModel) -> VoteRecord:
    """Build a vote record from its row.

    Raises:
        InvalidStateError: if the stored vote is neither accept nor reject.
    """

    try:
        vote = Vote(model.vote)
    except ValueError as exc:
        raise InvalidStateError(
            f"unable to build vote record for node {model.voter_node_id!r}: "
            f"unknown vote {model.vote!r}"
        ) from exc
    return VoteRecord(
        public_key=model.public_key,
        vote=vote,
        voter_node_id=model.voter_node_id,
    )


def admin_event_from_model(
    model: AdminServiceEventModel, proposal: CircuitProposal
) -> AdminServiceEvent:
    """Pair an event row with its finished proposal.

    The row's ``data`` column holds the requester key of vote, accept and reject
    events and must be empty for every other event type.
    """

    event_type = decode_code(EventType, model.event_type, field="event type")
    try:
        return AdminServiceEvent(
            event_id=model.id,
            event_type=event_type,
            proposal=proposal,
            requester=model.data,
        )
    except ValueError as exc:
        raise ConversionError(f"Invalid event {model.id}: {exc}") from exc
