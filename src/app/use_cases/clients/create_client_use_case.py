"""
Use Case: Create Client

Persists a new individual or business client with default commercial terms
and a zeroed commercial history. Callers validate the payload first; this
use case only enforces the shape of the client union and store constraints.
"""

from typing import Any, Mapping, Optional, Union
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from src.app.services.client_validation_service import registration_number_of
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Client, ClientAuditAction, ClientAuditEvent, ClientStatus, ClientType
from src.libs.result import Error, Result, Return

from .dtos import (
    ClientResponse,
    CommercialHistory,
    CreateBusinessClientCommand,
    CreateIndividualClientCommand,
    create_client_command_adapter,
)


def pydantic_error_details(exc: ValidationError) -> dict:
    """Flatten pydantic errors into field/message pairs"""
    return {
        "errors": [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
    }


class CreateClientUseCase:
    """
    Create a client.

    Business Logic:
    1. Parse the payload into the individual/business command union
    2. Fill commercial_info defaults, zero commercial_history
    3. Persist with status=active and denormalized lookup columns
    4. Create audit event
    5. Wrap store constraint violations as CREATE_FAILED
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        data: Union[Mapping[str, Any], CreateIndividualClientCommand, CreateBusinessClientCommand],
        actor_id: Optional[UUID] = None,
    ) -> Result[ClientResponse]:
        """
        Execute create client use case.

        Args:
            data: raw payload or an already parsed create command
            actor_id: UUID of the acting user, if known

        Returns:
            Result[ClientResponse] with the stored client

        Errors:
            - INVALID_CLIENT_DATA: payload does not fit the client union
            - CREATE_FAILED: store rejected the insert (e.g. unique index)
        """
        if isinstance(data, (CreateIndividualClientCommand, CreateBusinessClientCommand)):
            command = data
        else:
            try:
                command = create_client_command_adapter.validate_python(data)
            except ValidationError as exc:
                return Return.err(
                    Error(
                        "INVALID_CLIENT_DATA",
                        "Invalid client data",
                        details=pydantic_error_details(exc),
                    )
                )

        contact_info = command.contact_info.model_dump(mode="json", exclude_none=True)
        client = Client(
            client_type=ClientType(command.client_type),
            status=ClientStatus.active,
            email=contact_info["email"].strip().lower(),
            contact_info=contact_info,
            commercial_info=command.commercial_info.model_dump(mode="json"),
            commercial_history=CommercialHistory().model_dump(),
            tags=list(dict.fromkeys(command.tags)),
            internal_notes=command.internal_notes,
            created_by=actor_id,
        )
        if isinstance(command, CreateIndividualClientCommand):
            client.individual_info = command.individual_info.model_dump(
                mode="json", exclude_none=True
            )
        else:
            client.business_info = command.business_info.model_dump(
                mode="json", exclude_none=True
            )
            client.registration_number = registration_number_of(client.business_info)

        async with self.uow:
            try:
                client = await self.uow.clients.create(client)
                await self.uow.audit_events.create(
                    ClientAuditEvent(
                        client_id=client.id,
                        actor_id=actor_id,
                        action=ClientAuditAction.created.value,
                        event_metadata={"client_type": client.client_type.value},
                    )
                )
                await self.uow.commit()
            except IntegrityError as exc:
                await self.uow.rollback()
                reason = str(exc.orig) if exc.orig is not None else str(exc)
                return Return.err(
                    Error(
                        "CREATE_FAILED",
                        f"Failed to create client: {reason}",
                        reason=reason,
                    )
                )

            return Return.ok(ClientResponse.from_entity(client))
