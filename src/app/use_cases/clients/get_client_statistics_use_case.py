"""
Use Case: Get Client Statistics

Folder counts by status plus the revenue and balance figures kept in the
client's commercial history.
"""

from collections import Counter
from datetime import timedelta
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import FolderStatus
from src.libs.result import Error, Result, Return

from .dtos import ClientStatisticsResponse

STATISTICS_PERIOD_DAYS = 30


class GetClientStatisticsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, client_id: UUID) -> Result[ClientStatisticsResponse]:
        async with self.uow:
            client = await self.uow.clients.get_by_id(client_id)
            if not client:
                return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))

            folders = await self.uow.folders.get_by_client_id(client_id)
            by_status = Counter(FolderStatus(folder.status).value for folder in folders)

            commercial = client.commercial_info or {}
            history = client.commercial_history or {}
            credit_limit = float(commercial.get("credit_limit", 0) or 0)
            balance = float(history.get("current_balance", 0) or 0)

            now = utcnow()
            return Return.ok(
                ClientStatisticsResponse(
                    client_id=client.id,
                    total_folders=len(folders),
                    active_folders=by_status.get(FolderStatus.active.value, 0),
                    folders_by_status={status.value: by_status.get(status.value, 0) for status in FolderStatus},
                    total_revenue=float(history.get("total_orders_amount", 0) or 0),
                    total_orders_count=int(history.get("total_orders_count", 0) or 0),
                    current_balance=balance,
                    credit_limit=credit_limit,
                    available_credit=credit_limit - balance,
                    revenue_currency=commercial.get("credit_limit_currency", "EUR"),
                    average_payment_delay_days=float(
                        history.get("average_payment_delay_days", 0) or 0
                    ),
                    period_start=now - timedelta(days=STATISTICS_PERIOD_DAYS),
                    period_end=now,
                    calculated_at=now,
                )
            )
