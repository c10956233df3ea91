"""
Use Case: Batch Delete Clients

Deletes each client through DeleteClientUseCase with shared parameters, so
folder handling applies per client and every transferred folder goes to
the same target.

A preflight read runs before the first item: clients that are already
soft-deleted fail with DELETED_CLIENT instead of CLIENT_NOT_FOUND, and
every client holding active folders gets an ACTIVE_FOLDERS warning on the
batch result.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Set
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.clients import DeleteClientCommand, DeleteClientUseCase
from src.domain.entities import BatchOperationType, FolderHandling
from src.libs.result import Error, Result, Return

from .batch_runner import BatchRunner, ProgressCallback, invalid_batch, parse_client_ids
from .cancellation import CancellationToken
from .dtos import BatchItem, BatchItemOutcome, BatchResult

logger = logging.getLogger(__name__)


def active_folder_warnings(client_ids: Sequence[UUID], active_counts: Dict[UUID, int]) -> List[str]:
    """One warning per client holding active folders, in request order"""
    return [
        f"ACTIVE_FOLDERS: client {client_id} has {active_counts[client_id]} active folder(s)"
        for client_id in client_ids
        if active_counts.get(client_id)
    ]


class BatchDeleteClientsUseCase:
    def __init__(self, uow: UnitOfWork, runner: Optional[BatchRunner] = None):
        self.uow = uow
        self.runner = runner or BatchRunner()

    async def _preflight(self, client_ids: Sequence[UUID]):
        async with self.uow:
            known = await self.uow.clients.get_by_ids(client_ids, include_deleted=True)
            active_counts = await self.uow.folders.count_active_by_client_ids(client_ids)
        deleted_ids: Set[UUID] = {client.id for client in known if client.deleted_at is not None}
        return deleted_ids, active_folder_warnings(client_ids, active_counts)

    async def execute(
        self,
        client_ids: Sequence[Any],
        command: Optional[DeleteClientCommand] = None,
        actor_id: Optional[UUID] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Result[BatchResult]:
        command = command or DeleteClientCommand()
        ids_result = parse_client_ids(client_ids)
        if ids_result.is_err():
            return ids_result
        if (
            command.handle_folders == FolderHandling.transfer
            and command.transfer_to_client_id is None
        ):
            return invalid_batch("transfer_to_client_id is required to transfer folders")
        size_error = self.runner.check_size(len(ids_result.value))
        if size_error:
            return Return.err(size_error)

        deleted_ids, warnings = await self._preflight(ids_result.value)
        if warnings:
            logger.info(f"Batch delete preflight: {len(warnings)} client(s) with active folders")

        async def handle(item: BatchItem) -> Result[BatchItemOutcome]:
            if item.client_id in deleted_ids:
                return Return.err(Error("DELETED_CLIENT", "Client is already deleted"))
            result = await DeleteClientUseCase(self.uow).execute(item.client_id, command, actor_id)
            if result.is_err():
                return result
            return Return.ok(
                BatchItemOutcome(
                    client_id=item.client_id,
                    folder_actions=result.value.folder_actions,
                )
            )

        params = command.model_dump(mode="json")
        batch_items = [
            BatchItem(input_data={"client_id": str(client_id), **params}, client_id=client_id)
            for client_id in ids_result.value
        ]
        result = await self.runner.run(
            BatchOperationType.delete,
            batch_items,
            handle,
            progress_callback=progress_callback,
            cancellation_token=cancellation_token,
        )
        result.warnings = [*warnings, *result.warnings]
        return Return.ok(result)
