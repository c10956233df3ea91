from typing import List
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_event_repository import IClientAuditEventRepository
from src.domain.entities import ClientAuditEvent


class ClientAuditEventRepository(IClientAuditEventRepository):
    """ClientAuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, event: ClientAuditEvent) -> ClientAuditEvent:
        """Create a new audit event (immutable)"""
        self.session.add(event)
        await self.session.flush()
        await self.session.refresh(event)
        return event

    async def get_by_client_id(self, client_id: UUID) -> List[ClientAuditEvent]:
        """Get all events of a client, oldest first"""
        stmt = (
            select(ClientAuditEvent)
            .where(ClientAuditEvent.client_id == client_id)
            .order_by(ClientAuditEvent.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
