from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from src.domain.entities import Folder, FolderStatus


class IFolderRepository(ABC):
    """Folder repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, folder_id: UUID) -> Optional[Folder]:
        """Get folder by ID"""
        pass

    @abstractmethod
    async def get_by_client_id(
        self, client_id: UUID, statuses: Optional[Sequence[FolderStatus]] = None
    ) -> List[Folder]:
        """Get all folders of a client, optionally restricted to some statuses"""
        pass

    @abstractmethod
    async def count_by_client_id(
        self, client_id: UUID, status: Optional[FolderStatus] = None
    ) -> int:
        """Count folders of a client, optionally with a given status"""
        pass

    @abstractmethod
    async def count_active_by_client_ids(self, client_ids: Sequence[UUID]) -> Dict[UUID, int]:
        """Active folder count per client; clients without active folders are omitted"""
        pass

    @abstractmethod
    async def create(self, folder: Folder) -> Folder:
        """Create a new folder"""
        pass

    @abstractmethod
    async def update(self, folder: Folder) -> Folder:
        """Update existing folder"""
        pass
