"""
Use Case: Update Client

Partial update of a live client. JSON sections are deep-merged key by key,
scalar fields are replaced. Server-maintained fields are never written from
the payload.
"""

from typing import Any, Dict, Mapping, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from src.app.services.client_validation_service import (
    ClientValidationService,
    registration_number_of,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import deep_merge, utcnow
from src.domain.entities import ClientAuditAction, ClientAuditEvent, ClientStatus
from src.libs.result import Error, Result, Return

from .dtos import ClientResponse

PROTECTED_FIELDS = {
    "id",
    "client_type",
    "email",
    "registration_number",
    "commercial_history",
    "created_by",
    "created_at",
    "updated_at",
    "deleted_at",
    "deleted_by",
    "deletion_reason",
}

MERGED_SECTIONS = ("individual_info", "business_info", "contact_info", "commercial_info")


class UpdateClientUseCase:
    """
    Update a client.

    Business Logic:
    1. Load the client (soft-deleted clients count as missing)
    2. Drop protected fields from the payload
    3. Check update constraints (status transition, credit limit vs
       balance, client type consistency)
    4. Deep-merge JSON sections, replace tags/status/notes
    5. Refresh the denormalized email and registration number columns
    6. Create audit event (status_changed when the status moved)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        client_id: UUID,
        data: Mapping[str, Any],
        actor_id: Optional[UUID] = None,
    ) -> Result[ClientResponse]:
        """
        Execute update client use case.

        Errors:
            - CLIENT_NOT_FOUND: no live client with this id
            - INVALID_CLIENT_DATA: a section is not an object
            - INVALID_ENUM_VALUE / INVALID_STATUS_TRANSITION /
              CREDIT_LIMIT_BELOW_BALANCE / CLIENT_TYPE_MISMATCH:
              update constraint violated
            - DUPLICATE_VALUE: store rejected the new email
        """
        patch = {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}

        async with self.uow:
            client = await self.uow.clients.get_by_id(client_id)
            if not client:
                return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))

            validator = ClientValidationService(self.uow)
            constraints = validator.validate_update_constraints(client.status, patch, client)
            if not constraints.is_valid:
                first = constraints.errors[0]
                return Return.err(
                    Error(
                        first.code,
                        first.message,
                        details={"errors": [e.model_dump(mode="json") for e in constraints.errors]},
                    )
                )

            changes: Dict[str, Any] = {}
            for section in MERGED_SECTIONS:
                if section not in patch or patch[section] is None:
                    continue
                if not isinstance(patch[section], Mapping):
                    return Return.err(
                        Error(
                            "INVALID_CLIENT_DATA",
                            f"{section} must be an object",
                        )
                    )
                # New object so the JSON column is flagged dirty
                setattr(client, section, deep_merge(getattr(client, section) or {}, patch[section]))
                changes[section] = patch[section]

            if "tags" in patch:
                client.tags = list(dict.fromkeys(patch["tags"] or []))
                changes["tags"] = client.tags
            if "internal_notes" in patch:
                client.internal_notes = patch["internal_notes"]
                changes["internal_notes"] = patch["internal_notes"]

            previous_status = client.status
            if patch.get("status") is not None:
                client.status = ClientStatus(patch["status"])
                changes["status"] = client.status.value

            client.email = (client.contact_info.get("email") or "").strip().lower()
            client.registration_number = registration_number_of(client.business_info)
            client.updated_at = utcnow()

            action = ClientAuditAction.updated
            metadata: Dict[str, Any] = {"fields": sorted(changes)}
            if client.status != previous_status:
                action = ClientAuditAction.status_changed
                metadata["from_status"] = previous_status.value
                metadata["to_status"] = client.status.value

            try:
                client = await self.uow.clients.update(client)
                await self.uow.audit_events.create(
                    ClientAuditEvent(
                        client_id=client.id,
                        actor_id=actor_id,
                        action=action.value,
                        event_metadata=metadata,
                    )
                )
                await self.uow.commit()
            except IntegrityError as exc:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        "DUPLICATE_VALUE",
                        "Email address already exists",
                        reason=str(exc.orig) if exc.orig is not None else str(exc),
                    )
                )

            return Return.ok(ClientResponse.from_entity(client))
