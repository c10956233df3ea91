"""
Use Case: Batch Tag Operations

add_tags / remove_tags / replace_tags over many clients. Each client's
current tags are read, combined with the requested tags and written back
through UpdateClientUseCase. Re-applying the same operation is a no-op.
"""

from typing import Any, List, Optional, Sequence
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.clients import UpdateClientUseCase
from src.domain.entities import BatchOperationType
from src.libs.result import Error, Result, Return

from .batch_runner import BatchRunner, ProgressCallback, invalid_batch, parse_client_ids
from .cancellation import CancellationToken
from .dtos import BatchItem, BatchItemOutcome, BatchResult

TAG_OPERATIONS = (
    BatchOperationType.add_tags,
    BatchOperationType.remove_tags,
    BatchOperationType.replace_tags,
)


def apply_tag_operation(
    operation: BatchOperationType, current: Sequence[str], tags: Sequence[str]
) -> List[str]:
    """Union, difference or replacement, preserving first-seen order"""
    if operation == BatchOperationType.add_tags:
        return list(dict.fromkeys([*current, *tags]))
    if operation == BatchOperationType.remove_tags:
        removed = set(tags)
        return [tag for tag in current if tag not in removed]
    return list(dict.fromkeys(tags))


class BatchTagsUseCase:
    def __init__(self, uow: UnitOfWork, runner: Optional[BatchRunner] = None):
        self.uow = uow
        self.runner = runner or BatchRunner()

    async def execute(
        self,
        operation: BatchOperationType,
        client_ids: Sequence[Any],
        tags: Sequence[Any],
        actor_id: Optional[UUID] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Result[BatchResult]:
        """
        Errors (whole batch):
            - UNSUPPORTED_OPERATION: operation is not a tag operation
            - INVALID_BATCH: bad id list, or tags not a list of non-empty
              strings (empty list allowed only for replace_tags)
            - BATCH_SIZE_EXCEEDED
        """
        if operation not in TAG_OPERATIONS:
            return Return.err(
                Error("UNSUPPORTED_OPERATION", f"{operation} is not a tag operation")
            )
        ids_result = parse_client_ids(client_ids)
        if ids_result.is_err():
            return ids_result
        if not isinstance(tags, (list, tuple)) or not all(
            isinstance(tag, str) and tag.strip() for tag in tags
        ):
            return invalid_batch("tags must be a list of non-empty strings")
        if not tags and operation != BatchOperationType.replace_tags:
            return invalid_batch("tags must not be empty")
        size_error = self.runner.check_size(len(ids_result.value))
        if size_error:
            return Return.err(size_error)

        tags = [tag.strip() for tag in tags]

        async def handle(item: BatchItem) -> Result[BatchItemOutcome]:
            async with self.uow:
                client = await self.uow.clients.get_by_id(item.client_id)
                if not client:
                    return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))
                current = list(client.tags or [])

            new_tags = apply_tag_operation(operation, current, tags)
            if new_tags == current:
                return Return.ok(BatchItemOutcome(client_id=item.client_id))

            result = await UpdateClientUseCase(self.uow).execute(
                item.client_id, {"tags": new_tags}, actor_id
            )
            if result.is_err():
                return result
            return Return.ok(BatchItemOutcome(client_id=item.client_id))

        batch_items = [
            BatchItem(input_data={"client_id": str(client_id), "tags": tags}, client_id=client_id)
            for client_id in ids_result.value
        ]
        return Return.ok(
            await self.runner.run(
                operation,
                batch_items,
                handle,
                progress_callback=progress_callback,
                cancellation_token=cancellation_token,
            )
        )
