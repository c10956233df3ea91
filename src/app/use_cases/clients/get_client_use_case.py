"""
Use Case: Get Client

Looks up a single live client. A missing or soft-deleted client is not an
error here: the result simply carries None.
"""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return

from .dtos import ClientResponse


class GetClientUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, client_id: UUID) -> Result[Optional[ClientResponse]]:
        async with self.uow:
            client = await self.uow.clients.get_by_id(client_id)
            if client is None:
                return Return.ok(None)
            return Return.ok(ClientResponse.from_entity(client))
