from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.batch import BatchRequest, BatchResult, BatchRunner, ExecuteBatchUseCase
from src.depends import get_batch_runner, get_current_actor, get_unit_of_work

router = APIRouter(prefix="/clients/batch", tags=["Batch"])


@router.post("", status_code=status.HTTP_200_OK, response_model=BatchResult)
async def execute_batch(
    request: BatchRequest,
    actor_id: Optional[UUID] = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
    runner: BatchRunner = Depends(get_batch_runner),
):
    """
    Execute Batch Operation

    Applies one operation (create, update, delete, add_tags, remove_tags,
    replace_tags, update_status) to many clients. Item failures do not stop
    the batch: the response is 200 with failed_count > 0.

    Raises:
        - 400 Bad Request: INVALID_BATCH, UNSUPPORTED_OPERATION,
                           BATCH_SIZE_EXCEEDED (nothing was applied)
    """
    result = await ExecuteBatchUseCase(uow, runner).execute(request, actor_id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
