"""
Use Case: List Clients

Paginated listing of live clients, newest first.
"""

import math

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return

from .dtos import ClientListResponse, ClientResponse, ListClientsQuery


class ListClientsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, query: ListClientsQuery) -> Result[ClientListResponse]:
        async with self.uow:
            clients, total = await self.uow.clients.list(
                statuses=query.statuses or None,
                client_types=query.client_types or None,
                offset=(query.page - 1) * query.page_size,
                limit=query.page_size,
            )

            return Return.ok(
                ClientListResponse(
                    items=[ClientResponse.from_entity(client) for client in clients],
                    total=total,
                    page=query.page,
                    page_size=query.page_size,
                    total_pages=math.ceil(total / query.page_size) if total else 0,
                )
            )
