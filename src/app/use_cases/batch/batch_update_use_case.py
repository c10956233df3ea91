"""
Use Case: Batch Update Clients

Applies one partial update to many clients. Each client is validated and
updated on its own; the update constraints (status transition, credit
limit vs balance) are checked against each client's current state.
"""

from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

from src.app.services.client_validation_service import ClientValidationService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.clients import UpdateClientUseCase
from src.domain.entities import BatchOperationType
from src.libs.result import Error, Result, Return

from .batch_runner import BatchRunner, ProgressCallback, invalid_batch, parse_client_ids
from .cancellation import CancellationToken
from .dtos import BatchItem, BatchItemOutcome, BatchResult


class BatchUpdateClientsUseCase:
    def __init__(self, uow: UnitOfWork, runner: Optional[BatchRunner] = None):
        self.uow = uow
        self.runner = runner or BatchRunner()

    async def execute(
        self,
        client_ids: Sequence[Any],
        updates: Mapping[str, Any],
        actor_id: Optional[UUID] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Result[BatchResult]:
        ids_result = parse_client_ids(client_ids)
        if ids_result.is_err():
            return ids_result
        if not isinstance(updates, Mapping) or not updates:
            return invalid_batch("updates must be a non-empty object")
        size_error = self.runner.check_size(len(ids_result.value))
        if size_error:
            return Return.err(size_error)

        updates = dict(updates)

        async def handle(item: BatchItem) -> Result[BatchItemOutcome]:
            async with self.uow:
                validation = await ClientValidationService(self.uow).validate_update_data(
                    item.client_id, updates
                )
            if not validation.is_valid:
                return Return.err(
                    Error(
                        "VALIDATION_FAILED",
                        validation.first_error_message(),
                        details={
                            "errors": [e.model_dump(mode="json") for e in validation.errors]
                        },
                    )
                )

            # Loads the client and enforces the update constraints
            result = await UpdateClientUseCase(self.uow).execute(item.client_id, updates, actor_id)
            if result.is_err():
                return result
            return Return.ok(BatchItemOutcome(client_id=item.client_id))

        batch_items = [
            BatchItem(input_data={"client_id": str(client_id), "updates": updates}, client_id=client_id)
            for client_id in ids_result.value
        ]
        return Return.ok(
            await self.runner.run(
                BatchOperationType.update,
                batch_items,
                handle,
                progress_callback=progress_callback,
                cancellation_token=cancellation_token,
            )
        )
