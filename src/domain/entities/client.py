"""
Client Entity

Commercial client of the back-office: either an individual or a business.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow

from .enums import ClientStatus, ClientType


class Client(SQLModel, table=True):
    """
    Client entity - tagged union over client_type.

    Business Rules:
    - Exactly one of individual_info / business_info is populated,
      matching client_type
    - commercial_history is maintained by the server, never by callers
    - Soft delete: deleted_at marks the row as logically removed, it is
      excluded from every normal read but physically retained
    - status=deleted is never written through a status update
    - email (lower-cased copy of contact_info.email) is unique among
      non-deleted clients
    """

    __tablename__ = "clients"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_type: ClientType = Field(nullable=False)
    status: ClientStatus = Field(default=ClientStatus.active)

    # Denormalized lookup columns for uniqueness checks
    email: str = Field(max_length=255, nullable=False, index=True)
    registration_number: Optional[str] = Field(default=None, max_length=100, index=True)

    individual_info: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))
    business_info: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))
    contact_info: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    commercial_info: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    commercial_history: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    internal_notes: Optional[str] = Field(default=None)

    created_by: Optional[UUID] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )

    # Soft delete support
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    deleted_by: Optional[UUID] = Field(default=None)
    deletion_reason: Optional[str] = Field(default=None, max_length=500)

    __table_args__ = (
        Index("idx_client_status", "status"),
        Index("idx_client_type", "client_type"),
        Index("idx_client_deleted_at", "deleted_at"),
        Index(
            "uq_client_email_live",
            "email",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def display_name(self) -> str:
        if self.client_type == ClientType.individual:
            info = self.individual_info or {}
            return f"{info.get('first_name', '')} {info.get('last_name', '')}".strip()
        info = self.business_info or {}
        return info.get("company_name", "")
