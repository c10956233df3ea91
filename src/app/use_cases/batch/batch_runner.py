"""
Batch runner shared by every batch use case.

Processes items sequentially in fixed-size chunks. Each item is isolated:
whatever happens while handling it (error result or exception) becomes a
failed BatchOperationResult and the run moves on to the next item.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Union
from uuid import UUID

from src.domain.entities import BatchItemStatus, BatchOperationType
from src.libs.result import Error, Result, Return

from .cancellation import CancellationToken
from .dtos import (
    BatchItem,
    BatchItemOutcome,
    BatchOperationResult,
    BatchProgress,
    BatchResult,
)

logger = logging.getLogger(__name__)

DEFAULT_BATCH_MAX_SIZE = 1000
DEFAULT_BATCH_CHUNK_SIZE = 100

ItemHandler = Callable[[BatchItem], Awaitable[Result[BatchItemOutcome]]]
ProgressCallback = Callable[
    [BatchProgress, CancellationToken], Union[None, Awaitable[None]]
]


def invalid_batch(message: str, **details: Any) -> Result[Any]:
    return Return.err(Error("INVALID_BATCH", message, details=details or None))


def parse_client_ids(raw_ids: Any) -> Result[List[UUID]]:
    """
    Check the id list of a batch envelope.

    The whole batch is rejected when the list is empty, contains a
    malformed id or names the same client twice.
    """
    if not isinstance(raw_ids, (list, tuple)) or not raw_ids:
        return invalid_batch("client_ids must be a non-empty list")

    client_ids: List[UUID] = []
    seen = set()
    for index, raw in enumerate(raw_ids):
        try:
            client_id = raw if isinstance(raw, UUID) else UUID(str(raw))
        except ValueError:
            return invalid_batch(
                f"Invalid client id at position {index}", index=index, value=str(raw)
            )
        if client_id in seen:
            return invalid_batch(
                f"Duplicate client id at position {index}", index=index, value=str(client_id)
            )
        seen.add(client_id)
        client_ids.append(client_id)
    return Return.ok(client_ids)


class BatchRunner:
    """
    Drives a batch through an item handler.

    Flow:
    1. Reject batches larger than max_size (no item is touched)
    2. Split the rest into chunks of chunk_size, processed in order
    3. Before each item, stop if the cancellation token is set
    4. After each item, report progress to the callback (sync or async)
    """

    def __init__(
        self,
        max_size: int = DEFAULT_BATCH_MAX_SIZE,
        chunk_size: int = DEFAULT_BATCH_CHUNK_SIZE,
    ):
        self.max_size = max_size
        self.chunk_size = max(1, chunk_size)

    def check_size(self, count: int) -> Optional[Error]:
        if count > self.max_size:
            return Error(
                "BATCH_SIZE_EXCEEDED",
                f"Batch size {count} exceeds the limit of {self.max_size}",
                details={"size": count, "max_size": self.max_size},
            )
        return None

    async def run(
        self,
        operation_type: BatchOperationType,
        items: Sequence[BatchItem],
        handler: ItemHandler,
        progress_callback: Optional[ProgressCallback] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> BatchResult:
        token = cancellation_token or CancellationToken()
        total = len(items)
        successful: List[BatchOperationResult] = []
        failed: List[BatchOperationResult] = []
        warnings: List[str] = []
        cancelled = False

        chunks = [items[i : i + self.chunk_size] for i in range(0, total, self.chunk_size)]
        if len(chunks) > 1:
            warnings.append(
                f"Large batch of {total} items processed in {len(chunks)} chunks "
                f"of up to {self.chunk_size}"
            )

        logger.info(f"Batch {operation_type.value} started: {total} item(s)")

        completed = 0
        for chunk_index, chunk in enumerate(chunks, start=1):
            if token.cancelled:
                cancelled = True
                break
            if len(chunks) > 1:
                logger.info(
                    f"Batch {operation_type.value}: chunk {chunk_index}/{len(chunks)} "
                    f"({len(chunk)} item(s))"
                )

            for item in chunk:
                if token.cancelled:
                    cancelled = True
                    break

                outcome = await self._run_item(operation_type, item, handler)
                if outcome.status == BatchItemStatus.success:
                    successful.append(outcome)
                else:
                    failed.append(outcome)
                    logger.warning(
                        f"Batch {operation_type.value} item failed "
                        f"(client_id={outcome.client_id}): {outcome.error}"
                    )

                completed += 1
                if progress_callback is not None:
                    progress = BatchProgress(
                        completed=completed,
                        total=total,
                        percentage=round(completed * 100 / total, 2),
                    )
                    maybe_awaitable = progress_callback(progress, token)
                    if inspect.isawaitable(maybe_awaitable):
                        await maybe_awaitable

            if cancelled:
                break

        logger.info(
            f"Batch {operation_type.value} finished: {len(successful)} succeeded, "
            f"{len(failed)} failed, cancelled={cancelled}"
        )

        return BatchResult(
            success=not failed,
            total_processed=len(successful) + len(failed),
            successful_count=len(successful),
            failed_count=len(failed),
            successful_operations=successful,
            failed_operations=failed,
            warnings=warnings,
            cancelled=cancelled,
        )

    async def _run_item(
        self,
        operation_type: BatchOperationType,
        item: BatchItem,
        handler: ItemHandler,
    ) -> BatchOperationResult:
        try:
            result = await handler(item)
        except Exception as exc:
            return BatchOperationResult(
                operation_type=operation_type,
                status=BatchItemStatus.error,
                client_id=item.client_id,
                error=str(exc) or exc.__class__.__name__,
                error_details={"code": "UNEXPECTED_ERROR", "exception": exc.__class__.__name__},
                input_data=item.input_data,
            )

        if result.is_err():
            error = result.error
            details = {"code": error.code}
            if error.reason:
                details["reason"] = error.reason
            if error.details:
                details.update(error.details)
            return BatchOperationResult(
                operation_type=operation_type,
                status=BatchItemStatus.error,
                client_id=item.client_id,
                error=error.message,
                error_details=details,
                input_data=item.input_data,
            )

        return BatchOperationResult(
            operation_type=operation_type,
            status=BatchItemStatus.success,
            client_id=result.value.client_id or item.client_id,
            input_data=item.input_data,
            folder_actions=result.value.folder_actions,
        )
