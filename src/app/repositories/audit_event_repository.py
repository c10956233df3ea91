from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import ClientAuditEvent


class IClientAuditEventRepository(ABC):
    """Client audit event repository interface - application layer"""

    @abstractmethod
    async def create(self, event: ClientAuditEvent) -> ClientAuditEvent:
        """Record an audit event"""
        pass

    @abstractmethod
    async def get_by_client_id(self, client_id: UUID) -> List[ClientAuditEvent]:
        """Get all events of a client, oldest first"""
        pass
