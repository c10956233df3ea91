from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.client_repository import IClientRepository
from src.domain.entities import Client, ClientStatus, ClientType


class ClientRepository(IClientRepository):
    """Client repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, client_id: UUID, include_deleted: bool = False
    ) -> Optional[Client]:
        """Get client by ID"""
        stmt = select(Client).where(Client.id == client_id)
        if not include_deleted:
            stmt = stmt.where(Client.deleted_at.is_(None))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(
        self, client_ids: Sequence[UUID], include_deleted: bool = False
    ) -> List[Client]:
        """Get clients by a list of IDs"""
        if not client_ids:
            return []
        stmt = select(Client).where(Client.id.in_(list(client_ids)))
        if not include_deleted:
            stmt = stmt.where(Client.deleted_at.is_(None))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_email(self, email: str) -> List[Client]:
        """Get non-deleted clients by email (stored lower-cased)"""
        stmt = select(Client).where(
            Client.email == email.strip().lower(), Client.deleted_at.is_(None)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_registration_number(self, registration_number: str) -> List[Client]:
        """Get non-deleted clients by registration number"""
        stmt = select(Client).where(
            Client.registration_number == registration_number.strip(),
            Client.deleted_at.is_(None),
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list(
        self,
        statuses: Optional[Sequence[ClientStatus]] = None,
        client_types: Optional[Sequence[ClientType]] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Client], int]:
        """List non-deleted clients, newest first"""
        conditions = [Client.deleted_at.is_(None)]
        if statuses:
            conditions.append(Client.status.in_(list(statuses)))
        if client_types:
            conditions.append(Client.client_type.in_(list(client_types)))

        count_stmt = select(func.count()).select_from(Client).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(Client)
            .where(*conditions)
            .order_by(Client.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def create(self, client: Client) -> Client:
        """Create a new client"""
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def update(self, client: Client) -> Client:
        """Update existing client"""
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def delete(self, client: Client) -> None:
        """Physically remove a client row"""
        await self.session.delete(client)
        await self.session.flush()
