from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IClientAuditEventRepository
from src.app.repositories.client_repository import IClientRepository
from src.app.repositories.folder_repository import IFolderRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    clients: IClientRepository
    folders: IFolderRepository
    audit_events: IClientAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
