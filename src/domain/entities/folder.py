"""
Folder Entity

Dependent work item (shipment file) belonging to exactly one client.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import ClientPriority, FolderStatus


class Folder(SQLModel, table=True):
    """
    Folder entity - dependent record owned by one client.

    Business Rules:
    - client_id is a weak back-reference (no foreign key): a hard-deleted
      client leaves its untouched folders pointing at the removed id
    - Active folders block client deletion unless forced
    - A forced deletion archives or transfers the active folders
    """

    __tablename__ = "folders"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_id: UUID = Field(nullable=False, index=True)
    title: Optional[str] = Field(default=None, max_length=255)

    status: FolderStatus = Field(default=FolderStatus.active)
    priority: ClientPriority = Field(default=ClientPriority.normal)

    created_by: Optional[UUID] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_folder_client_status", "client_id", "status"),
    )
