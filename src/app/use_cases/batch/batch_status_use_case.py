"""
Use Case: Batch Status Update

Moves many clients to one status. Each client goes through the status
transition table on its own; an illegal transition fails that client only.
"""

from typing import Any, Optional, Sequence
from uuid import UUID

from src.app.services.client_validation_service import ClientValidationService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.clients import UpdateClientUseCase
from src.domain.entities import BatchOperationType, ClientStatus
from src.libs.result import Error, Result, Return

from .batch_runner import BatchRunner, ProgressCallback, invalid_batch, parse_client_ids
from .cancellation import CancellationToken
from .dtos import BatchItem, BatchItemOutcome, BatchResult


class BatchUpdateStatusUseCase:
    def __init__(self, uow: UnitOfWork, runner: Optional[BatchRunner] = None):
        self.uow = uow
        self.runner = runner or BatchRunner()

    async def execute(
        self,
        client_ids: Sequence[Any],
        new_status: Any,
        actor_id: Optional[UUID] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Result[BatchResult]:
        ids_result = parse_client_ids(client_ids)
        if ids_result.is_err():
            return ids_result
        try:
            status = ClientStatus(new_status)
        except ValueError:
            return invalid_batch(f"Unknown status '{new_status}'", value=str(new_status))
        size_error = self.runner.check_size(len(ids_result.value))
        if size_error:
            return Return.err(size_error)

        async def handle(item: BatchItem) -> Result[BatchItemOutcome]:
            async with self.uow:
                client = await self.uow.clients.get_by_id(item.client_id)
                if not client:
                    return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))
                constraints = ClientValidationService(self.uow).validate_update_constraints(
                    client.status, {"status": status.value}, client
                )
            if not constraints.is_valid:
                first = constraints.errors[0]
                return Return.err(Error(first.code, first.message))

            result = await UpdateClientUseCase(self.uow).execute(
                item.client_id, {"status": status.value}, actor_id
            )
            if result.is_err():
                return result
            return Return.ok(BatchItemOutcome(client_id=item.client_id))

        batch_items = [
            BatchItem(
                input_data={"client_id": str(client_id), "new_status": status.value},
                client_id=client_id,
            )
            for client_id in ids_result.value
        ]
        return Return.ok(
            await self.runner.run(
                BatchOperationType.update_status,
                batch_items,
                handle,
                progress_callback=progress_callback,
                cancellation_token=cancellation_token,
            )
        )
