from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from src.domain.entities import Client, ClientStatus, ClientType


class IClientRepository(ABC):
    """Client repository interface - application layer"""

    @abstractmethod
    async def get_by_id(
        self, client_id: UUID, include_deleted: bool = False
    ) -> Optional[Client]:
        """Get client by ID; soft-deleted clients only when include_deleted"""
        pass

    @abstractmethod
    async def get_by_ids(
        self, client_ids: Sequence[UUID], include_deleted: bool = False
    ) -> List[Client]:
        """Get the clients among client_ids that exist, in no particular order"""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> List[Client]:
        """Get non-deleted clients whose email matches (case-insensitive)"""
        pass

    @abstractmethod
    async def find_by_registration_number(self, registration_number: str) -> List[Client]:
        """Get non-deleted clients with the given business registration number"""
        pass

    @abstractmethod
    async def list(
        self,
        statuses: Optional[Sequence[ClientStatus]] = None,
        client_types: Optional[Sequence[ClientType]] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Client], int]:
        """List non-deleted clients, newest first, with the total match count"""
        pass

    @abstractmethod
    async def create(self, client: Client) -> Client:
        """Create a new client"""
        pass

    @abstractmethod
    async def update(self, client: Client) -> Client:
        """Update existing client"""
        pass

    @abstractmethod
    async def delete(self, client: Client) -> None:
        """Physically remove a client row"""
        pass
