"""
Use Case: Delete Client

Soft or hard deletion of a client, with optional reconciliation of its
active folders (archive them, or transfer them to another client).
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import (
    ClientAuditAction,
    ClientAuditEvent,
    ClientStatus,
    DeletionType,
    FolderActionType,
    FolderHandling,
    FolderStatus,
)
from src.libs.result import Error, Result, Return

from .dtos import DeleteClientCommand, DeleteClientResponse, FolderActionInfo

logger = logging.getLogger(__name__)


class DeleteClientUseCase:
    """
    Delete a client.

    Business Logic:
    1. Load the client; missing or already soft-deleted is CLIENT_NOT_FOUND
    2. Count active folders; refuse unless force is set
    3. Validate the transfer target before touching anything
    4. Archive or transfer each active folder, one commit per folder
    5. Soft delete (deleted_at/deleted_by/deletion_reason, status=deleted)
       or hard delete (row removed)
    6. Create audit event

    The folder count is read then acted on without a lock: a folder created
    between steps 2 and 5 is neither blocked nor migrated.

    Cascade writes are not atomic with the deletion. If one fails, the
    folders already migrated stay migrated, the client is left in place
    and the error details carry the actions applied so far.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        client_id: UUID,
        command: Optional[DeleteClientCommand] = None,
        actor_id: Optional[UUID] = None,
    ) -> Result[DeleteClientResponse]:
        """
        Execute delete client use case.

        Args:
            client_id: UUID of the client to delete
            command: deletion parameters (soft, unforced by default)
            actor_id: UUID of the acting user, recorded as deleted_by

        Errors:
            - CLIENT_NOT_FOUND: no live client with this id
            - ACTIVE_FOLDERS: active folders exist and force is not set
            - TRANSFER_TARGET_REQUIRED: transfer without target id
            - INVALID_TRANSFER_TARGET: target is the client itself
            - TRANSFER_TARGET_NOT_FOUND: target missing or soft-deleted
            - FOLDER_CASCADE_FAILED: a folder write failed mid-cascade
        """
        command = command or DeleteClientCommand()

        async with self.uow:
            # 1. Get client
            client = await self.uow.clients.get_by_id(client_id)
            if not client:
                return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))

            # 2. Active folder guard
            active_count = await self.uow.folders.count_by_client_id(
                client_id, FolderStatus.active
            )
            if active_count > 0 and not command.force:
                return Return.err(
                    Error(
                        "ACTIVE_FOLDERS",
                        "Client has active folders",
                        reason=f"{active_count} active folder(s) must be handled first",
                        details={"active_folders_count": active_count},
                    )
                )

            # 3. Transfer target
            target_id = command.transfer_to_client_id
            if command.handle_folders == FolderHandling.transfer:
                if target_id is None:
                    return Return.err(
                        Error(
                            "TRANSFER_TARGET_REQUIRED",
                            "transfer_to_client_id is required to transfer folders",
                        )
                    )
                if target_id == client_id:
                    return Return.err(
                        Error(
                            "INVALID_TRANSFER_TARGET",
                            "Folders cannot be transferred to the deleted client",
                        )
                    )
                target = await self.uow.clients.get_by_id(target_id)
                if not target:
                    return Return.err(
                        Error("TRANSFER_TARGET_NOT_FOUND", "Transfer target client not found")
                    )

            # 4. Folder cascade
            folder_actions: List[FolderActionInfo] = []
            if active_count > 0 and command.handle_folders is not None:
                folders = await self.uow.folders.get_by_client_id(
                    client_id, [FolderStatus.active]
                )
                for folder in folders:
                    try:
                        if command.handle_folders == FolderHandling.archive:
                            folder.status = FolderStatus.archived
                            action = FolderActionInfo(
                                folder_id=folder.id, action=FolderActionType.archived
                            )
                        else:
                            folder.client_id = target_id
                            action = FolderActionInfo(
                                folder_id=folder.id,
                                action=FolderActionType.transferred,
                                target_client_id=target_id,
                            )
                        folder.updated_at = utcnow()
                        await self.uow.folders.update(folder)
                        await self.uow.commit()
                    except SQLAlchemyError as exc:
                        await self.uow.rollback()
                        logger.warning(
                            f"Folder cascade failed for client {client_id} "
                            f"after {len(folder_actions)} folder(s): {exc}"
                        )
                        return Return.err(
                            Error(
                                "FOLDER_CASCADE_FAILED",
                                "Failed to update client folders",
                                reason=str(exc),
                                details={
                                    "folder_actions": [
                                        a.model_dump(mode="json") for a in folder_actions
                                    ]
                                },
                            )
                        )
                    folder_actions.append(action)

            # 5. Deletion
            now = utcnow()
            previous_status = client.status
            if command.deletion_type == DeletionType.soft:
                client.status = ClientStatus.deleted
                client.deleted_at = now
                client.deleted_by = actor_id
                client.deletion_reason = command.reason
                client.updated_at = now
                await self.uow.clients.update(client)
            else:
                await self.uow.clients.delete(client)

            # 6. Audit event
            await self.uow.audit_events.create(
                ClientAuditEvent(
                    client_id=client_id,
                    actor_id=actor_id,
                    action=ClientAuditAction.deleted.value,
                    event_metadata={
                        "deletion_type": command.deletion_type.value,
                        "reason": command.reason,
                        "previous_status": previous_status.value,
                        "affected_folders_count": active_count,
                        "folder_actions": [a.model_dump(mode="json") for a in folder_actions],
                    },
                )
            )

            await self.uow.commit()

            logger.info(
                f"Client {client_id} deleted ({command.deletion_type.value}), "
                f"{active_count} active folder(s), {len(folder_actions)} folder action(s)"
            )

            return Return.ok(
                DeleteClientResponse(
                    success=True,
                    deletion_type=command.deletion_type,
                    affected_folders_count=active_count,
                    folder_actions=folder_actions,
                    deleted_at=now,
                )
            )
