from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.folder_repository import IFolderRepository
from src.domain.entities import Folder, FolderStatus


class FolderRepository(IFolderRepository):
    """Folder repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, folder_id: UUID) -> Optional[Folder]:
        """Get folder by ID"""
        stmt = select(Folder).where(Folder.id == folder_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_client_id(
        self, client_id: UUID, statuses: Optional[Sequence[FolderStatus]] = None
    ) -> List[Folder]:
        """Get all folders of a client"""
        stmt = select(Folder).where(Folder.client_id == client_id)
        if statuses:
            stmt = stmt.where(Folder.status.in_(list(statuses)))
        stmt = stmt.order_by(Folder.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_client_id(
        self, client_id: UUID, status: Optional[FolderStatus] = None
    ) -> int:
        """Count folders of a client"""
        stmt = select(func.count()).select_from(Folder).where(Folder.client_id == client_id)
        if status is not None:
            stmt = stmt.where(Folder.status == status)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def count_active_by_client_ids(self, client_ids: Sequence[UUID]) -> Dict[UUID, int]:
        """Count active folders of several clients in one query"""
        if not client_ids:
            return {}
        stmt = (
            select(Folder.client_id, func.count())
            .where(
                Folder.client_id.in_(list(client_ids)),
                Folder.status == FolderStatus.active,
            )
            .group_by(Folder.client_id)
        )
        result = await self.session.execute(stmt)
        return {client_id: count for client_id, count in result.all()}

    async def create(self, folder: Folder) -> Folder:
        """Create a new folder"""
        self.session.add(folder)
        await self.session.flush()
        await self.session.refresh(folder)
        return folder

    async def update(self, folder: Folder) -> Folder:
        """Update existing folder"""
        self.session.add(folder)
        await self.session.flush()
        await self.session.refresh(folder)
        return folder
