"""SQLAlchemy table metadata and row-model mappings for stored admin events."""

from __future__ import annotations

import logging
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Column,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    Integer,
    LargeBinary,
    String,
    Table,
    Text,
    orm,
)
from sqlalchemy.orm import configure_mappers

from adminevents.adapters.sqlalchemy.models import (
    AdminEventCircuitProposalModel,
    AdminEventProposedCircuitModel,
    AdminEventProposedNodeEndpointModel,
    AdminEventProposedNodeModel,
    AdminEventProposedServiceArgumentModel,
    AdminEventProposedServiceModel,
    AdminEventVoteRecordModel,
    AdminServiceEventModel,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

# SQLite only aliases ROWID for INTEGER primary keys.
EventIdType = BigInteger().with_variant(Integer(), "sqlite")

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Enumerated columns are plain strings: unknown codes must reach the decoders.

admin_service_event_table = Table(
    "admin_service_event",
    mapper_registry.metadata,
    Column("id", EventIdType, primary_key=True, autoincrement=True),
    Column("event_type", Text, nullable=False),
    Column("data", LargeBinary, nullable=True),
)

admin_event_circuit_proposal_table = Table(
    "admin_event_circuit_proposal",
    mapper_registry.metadata,
    Column(
        "event_id",
        EventIdType,
        ForeignKey("admin_service_event.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("proposal_type", Text, nullable=False),
    Column("circuit_id", Text, nullable=False),
    Column("circuit_hash", Text, nullable=False),
    Column("requester", LargeBinary, nullable=False),
    Column("requester_node_id", Text, nullable=False),
)

admin_event_proposed_circuit_table = Table(
    "admin_event_proposed_circuit",
    mapper_registry.metadata,
    Column(
        "event_id",
        EventIdType,
        ForeignKey("admin_service_event.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("circuit_id", Text, nullable=False),
    Column("authorization_type", Text, nullable=False),
    Column("persistence", Text, nullable=False),
    Column("durability", Text, nullable=False),
    Column("routes", Text, nullable=False),
    Column("circuit_management_type", Text, nullable=False),
    Column("application_metadata", LargeBinary, nullable=True),
    Column("comments", Text, nullable=True),
    Column("display_name", Text, nullable=True),
)

admin_event_proposed_service_table = Table(
    "admin_event_proposed_service",
    mapper_registry.metadata,
    Column(
        "event_id",
        EventIdType,
        ForeignKey("admin_service_event.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("service_id", String, primary_key=True),
    Column("service_type", Text, nullable=False),
    Column("node_id", Text, nullable=False),
)

admin_event_proposed_service_argument_table = Table(
    "admin_event_proposed_service_argument",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("event_id", EventIdType, nullable=False),
    Column("service_id", String, nullable=False),
    Column("key", Text, nullable=False),
    Column("value", Text, nullable=False),
    ForeignKeyConstraint(
        ["event_id", "service_id"],
        ["admin_event_proposed_service.event_id", "admin_event_proposed_service.service_id"],
        ondelete="CASCADE",
    ),
    Index("ix_admin_event_proposed_service_argument_owner", "event_id", "service_id"),
)

admin_event_proposed_node_table = Table(
    "admin_event_proposed_node",
    mapper_registry.metadata,
    Column(
        "event_id",
        EventIdType,
        ForeignKey("admin_service_event.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("node_id", String, primary_key=True),
)

admin_event_proposed_node_endpoint_table = Table(
    "admin_event_proposed_node_endpoint",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("event_id", EventIdType, nullable=False),
    Column("node_id", String, nullable=False),
    Column("endpoint", Text, nullable=False),
    ForeignKeyConstraint(
        ["event_id", "node_id"],
        ["admin_event_proposed_node.event_id", "admin_event_proposed_node.node_id"],
        ondelete="CASCADE",
    ),
    Index("ix_admin_event_proposed_node_endpoint_owner", "event_id", "node_id"),
)

admin_event_vote_record_table = Table(
    "admin_event_vote_record",
    mapper_registry.metadata,
    Column(
        "event_id",
        EventIdType,
        ForeignKey("admin_service_event.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("voter_node_id", String, primary_key=True),
    Column("public_key", LargeBinary, nullable=False),
    Column("vote", Text, nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Map the persistence row models onto their tables."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(AdminServiceEventModel, admin_service_event_table)
    mapper_registry.map_imperatively(
        AdminEventCircuitProposalModel, admin_event_circuit_proposal_table
    )
    mapper_registry.map_imperatively(
        AdminEventProposedCircuitModel, admin_event_proposed_circuit_table
    )
    mapper_registry.map_imperatively(
        AdminEventProposedServiceModel, admin_event_proposed_service_table
    )
    mapper_registry.map_imperatively(
        AdminEventProposedServiceArgumentModel, admin_event_proposed_service_argument_table
    )
    mapper_registry.map_imperatively(AdminEventProposedNodeModel, admin_event_proposed_node_table)
    mapper_registry.map_imperatively(
        AdminEventProposedNodeEndpointModel, admin_event_proposed_node_endpoint_table
    )
    mapper_registry.map_imperatively(AdminEventVoteRecordModel, admin_event_vote_record_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
