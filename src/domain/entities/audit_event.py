"""
ClientAuditEvent Entity

Immutable log of every client lifecycle mutation.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow


class ClientAuditEvent(SQLModel, table=True):
    """
    ClientAuditEvent entity - immutable log of client mutations.

    Business Rules:
    - Immutable (never updated or deleted)
    - Written in the same transaction as the mutation it records
    - Survives hard deletion of the client (no foreign key)
    - actor_id nullable for system actions
    """

    __tablename__ = "client_audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_id: UUID = Field(nullable=False, index=True)
    actor_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "created", "deleted"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_client_audit_created_at", "created_at"),
        Index("idx_client_audit_client_action", "client_id", "action"),
    )
