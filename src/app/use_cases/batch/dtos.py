"""
Batch Use Case DTOs (Data Transfer Objects)

Per-item and aggregate results of batch operations, plus the generic
batch envelope accepted by the dispatcher.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from src.app.use_cases.clients.dtos import FolderActionInfo
from src.domain.base import utcnow
from src.domain.entities import BatchItemStatus, BatchOperationType


# ============================================================================
# Internal item types
# ============================================================================


@dataclass
class BatchItem:
    """One unit of work handed to a batch handler"""

    input_data: Any
    client_id: Optional[UUID] = None


@dataclass
class BatchItemOutcome:
    """What a successful handler reports back"""

    client_id: Optional[UUID] = None
    folder_actions: Optional[List[FolderActionInfo]] = field(default=None)


# ============================================================================
# Command DTOs
# ============================================================================


class BatchRequest(BaseModel):
    """
    Generic batch envelope.

    Fields are loosely typed on purpose: malformed envelopes are reported
    as INVALID_BATCH by the dispatcher rather than as schema errors.
    """

    operation: str
    client_ids: Optional[List[Any]] = None
    items: Optional[List[Any]] = None
    updates: Optional[Dict[str, Any]] = None
    tags: Optional[List[Any]] = None
    new_status: Optional[str] = None
    deletion_type: Optional[str] = None
    reason: Optional[str] = None
    force: bool = False
    handle_folders: Optional[str] = None
    transfer_to_client_id: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class BatchOperationResult(BaseModel):
    """Outcome of one item of a batch"""

    id: UUID = Field(default_factory=uuid4)
    operation_type: BatchOperationType
    status: BatchItemStatus
    client_id: Optional[UUID] = None
    error: Optional[str] = None
    error_details: Optional[Dict[str, Any]] = None
    input_data: Any = None
    timestamp: datetime = Field(default_factory=utcnow)
    folder_actions: Optional[List[FolderActionInfo]] = None


class BatchResult(BaseModel):
    """Aggregate of a batch; success is true only when nothing failed"""

    success: bool
    total_processed: int
    successful_count: int
    failed_count: int
    successful_operations: List[BatchOperationResult] = Field(default_factory=list)
    failed_operations: List[BatchOperationResult] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    cancelled: bool = False


class BatchProgress(BaseModel):
    completed: int
    total: int
    percentage: float
