"""
Use Case: Batch Create Clients

Validates and creates each payload independently. A rejected payload is
reported in failed_operations and never blocks the others.
"""

from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

from src.app.services.client_validation_service import ClientValidationService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.clients import CreateClientUseCase
from src.domain.entities import BatchOperationType
from src.libs.result import Error, Result, Return

from .batch_runner import BatchRunner, ProgressCallback, invalid_batch
from .cancellation import CancellationToken
from .dtos import BatchItem, BatchItemOutcome, BatchResult


class BatchCreateClientsUseCase:
    def __init__(self, uow: UnitOfWork, runner: Optional[BatchRunner] = None):
        self.uow = uow
        self.runner = runner or BatchRunner()

    async def execute(
        self,
        items: Sequence[Any],
        actor_id: Optional[UUID] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Result[BatchResult]:
        """
        Errors (whole batch):
            - INVALID_BATCH: empty list or an item that is not an object
            - BATCH_SIZE_EXCEEDED: more items than the runner accepts
        """
        if not isinstance(items, (list, tuple)) or not items:
            return invalid_batch("items must be a non-empty list")
        for index, item in enumerate(items):
            if not isinstance(item, Mapping):
                return invalid_batch(f"Item at position {index} is not an object", index=index)
        size_error = self.runner.check_size(len(items))
        if size_error:
            return Return.err(size_error)

        async def handle(item: BatchItem) -> Result[BatchItemOutcome]:
            async with self.uow:
                validation = await ClientValidationService(self.uow).validate_client_data(
                    item.input_data
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

            result = await CreateClientUseCase(self.uow).execute(item.input_data, actor_id)
            if result.is_err():
                return result
            return Return.ok(BatchItemOutcome(client_id=result.value.id))

        batch_items = [BatchItem(input_data=dict(item)) for item in items]
        return Return.ok(
            await self.runner.run(
                BatchOperationType.create,
                batch_items,
                handle,
                progress_callback=progress_callback,
                cancellation_token=cancellation_token,
            )
        )
