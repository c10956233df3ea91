"""
Use Case: Restore Client

Brings a soft-deleted client back into normal reads.
"""

from typing import Optional
from uuid import UUID

from src.app.services.client_validation_service import ClientValidationService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import ClientAuditAction, ClientAuditEvent, ClientStatus
from src.libs.result import Error, Result, Return

from .dtos import ClientResponse


class RestoreClientUseCase:
    """
    Restore a soft-deleted client.

    Business Logic:
    1. Load the client including soft-deleted rows
    2. Re-check email / registration number against live clients
    3. Clear the soft-delete fields, put back the status it had before
       deletion (active when unknown)
    4. Create audit event

    Idempotent: restoring a live client succeeds without changes
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, client_id: UUID, actor_id: Optional[UUID] = None
    ) -> Result[ClientResponse]:
        async with self.uow:
            client = await self.uow.clients.get_by_id(client_id, include_deleted=True)
            if not client:
                return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))

            if not client.is_deleted:
                return Return.ok(ClientResponse.from_entity(client))

            uniqueness = await ClientValidationService(self.uow).check_unique_constraints(
                {"contact_info": client.contact_info, "business_info": client.business_info},
                exclude_client_id=client.id,
            )
            if not uniqueness.is_valid:
                return Return.err(
                    Error(
                        "DUPLICATE_VALUE",
                        "Another client now uses this client's identifiers",
                        details={"errors": [e.model_dump(mode="json") for e in uniqueness.errors]},
                    )
                )

            status = ClientStatus.active
            events = await self.uow.audit_events.get_by_client_id(client_id)
            for event in reversed(events):
                if event.action == ClientAuditAction.deleted.value:
                    previous = (event.event_metadata or {}).get("previous_status")
                    if previous and previous != ClientStatus.deleted.value:
                        status = ClientStatus(previous)
                    break

            client.status = status
            client.deleted_at = None
            client.deleted_by = None
            client.deletion_reason = None
            client.updated_at = utcnow()
            client = await self.uow.clients.update(client)

            await self.uow.audit_events.create(
                ClientAuditEvent(
                    client_id=client_id,
                    actor_id=actor_id,
                    action=ClientAuditAction.restored.value,
                    event_metadata={"status": status.value},
                )
            )

            await self.uow.commit()

            return Return.ok(ClientResponse.from_entity(client))
