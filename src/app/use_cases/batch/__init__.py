"""
Batch Use Cases

Multi-client create/update/delete/tag/status operations with per-item
isolation, progress reporting and cancellation.
"""

from .batch_create_use_case import BatchCreateClientsUseCase
from .batch_delete_use_case import BatchDeleteClientsUseCase
from .batch_runner import (
    DEFAULT_BATCH_CHUNK_SIZE,
    DEFAULT_BATCH_MAX_SIZE,
    BatchRunner,
    parse_client_ids,
)
from .batch_status_use_case import BatchUpdateStatusUseCase
from .batch_tags_use_case import BatchTagsUseCase, apply_tag_operation
from .batch_update_use_case import BatchUpdateClientsUseCase
from .cancellation import CancellationToken
from .dtos import BatchOperationResult, BatchProgress, BatchRequest, BatchResult
from .execute_batch_use_case import ExecuteBatchUseCase

__all__ = [
    "BatchRunner",
    "CancellationToken",
    "BatchCreateClientsUseCase",
    "BatchUpdateClientsUseCase",
    "BatchDeleteClientsUseCase",
    "BatchTagsUseCase",
    "BatchUpdateStatusUseCase",
    "ExecuteBatchUseCase",
    "BatchRequest",
    "BatchResult",
    "BatchOperationResult",
    "BatchProgress",
    "apply_tag_operation",
    "parse_client_ids",
    "DEFAULT_BATCH_MAX_SIZE",
    "DEFAULT_BATCH_CHUNK_SIZE",
]
