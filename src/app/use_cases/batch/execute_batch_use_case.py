"""
Use Case: Execute Batch

Dispatches a generic batch envelope to the use case of its operation
kind after checking the envelope fields that kind needs.
"""

from typing import Optional
from uuid import UUID

from pydantic import ValidationError

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.clients import DeleteClientCommand
from src.domain.entities import BatchOperationType
from src.libs.result import Error, Result, Return

from .batch_create_use_case import BatchCreateClientsUseCase
from .batch_delete_use_case import BatchDeleteClientsUseCase
from .batch_runner import BatchRunner, ProgressCallback, invalid_batch
from .batch_status_use_case import BatchUpdateStatusUseCase
from .batch_tags_use_case import TAG_OPERATIONS, BatchTagsUseCase
from .batch_update_use_case import BatchUpdateClientsUseCase
from .cancellation import CancellationToken
from .dtos import BatchRequest, BatchResult


class ExecuteBatchUseCase:
    """
    Route a batch envelope.

    Errors (whole batch):
        - UNSUPPORTED_OPERATION: unknown operation kind
        - INVALID_BATCH: a field required by the operation is missing or
          malformed
        - BATCH_SIZE_EXCEEDED
    """

    def __init__(self, uow: UnitOfWork, runner: Optional[BatchRunner] = None):
        self.uow = uow
        self.runner = runner or BatchRunner()

    async def execute(
        self,
        request: BatchRequest,
        actor_id: Optional[UUID] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Result[BatchResult]:
        try:
            operation = BatchOperationType(request.operation)
        except ValueError:
            return Return.err(
                Error(
                    "UNSUPPORTED_OPERATION",
                    f"Unsupported batch operation '{request.operation}'",
                    details={"supported": [op.value for op in BatchOperationType]},
                )
            )

        run_options = {
            "actor_id": actor_id,
            "progress_callback": progress_callback,
            "cancellation_token": cancellation_token,
        }

        if operation == BatchOperationType.create:
            return await BatchCreateClientsUseCase(self.uow, self.runner).execute(
                request.items, **run_options
            )

        if operation == BatchOperationType.update:
            return await BatchUpdateClientsUseCase(self.uow, self.runner).execute(
                request.client_ids, request.updates, **run_options
            )

        if operation in TAG_OPERATIONS:
            return await BatchTagsUseCase(self.uow, self.runner).execute(
                operation, request.client_ids, request.tags, **run_options
            )

        if operation == BatchOperationType.update_status:
            if request.new_status is None:
                return invalid_batch("new_status is required")
            return await BatchUpdateStatusUseCase(self.uow, self.runner).execute(
                request.client_ids, request.new_status, **run_options
            )

        try:
            command = DeleteClientCommand(
                **{
                    key: value
                    for key, value in {
                        "deletion_type": request.deletion_type,
                        "reason": request.reason,
                        "force": request.force,
                        "handle_folders": request.handle_folders,
                        "transfer_to_client_id": request.transfer_to_client_id,
                    }.items()
                    if value is not None
                }
            )
        except ValidationError as exc:
            return invalid_batch(
                "Invalid deletion parameters",
                errors=[
                    {"field": ".".join(str(p) for p in e["loc"]), "message": e["msg"]}
                    for e in exc.errors()
                ],
            )
        return await BatchDeleteClientsUseCase(self.uow, self.runner).execute(
            request.client_ids, command, **run_options
        )
