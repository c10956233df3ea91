"""
Shared steps of the contact use cases.

Contacts live in the ``business_info.contacts`` JSON list of a business
client and are addressed by their position in that list. Every mutation
leaves exactly one primary contact and goes through the same contact rules
as a full client payload before it is written.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from src.app.services.client_validation_service import ClientValidationService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Client, ClientAuditAction, ClientAuditEvent, ClientType
from src.libs.result import Error, Result, Return

from .dtos import ClientResponse

logger = logging.getLogger(__name__)


def set_single_primary(
    contacts: List[Dict[str, Any]], index: Optional[int] = None, fallback: int = 0
) -> None:
    """
    Flag exactly one contact as primary, in place.

    ``index`` forces the primary. Without it the first contact already
    flagged keeps the role, and ``fallback`` gets it when none is flagged.
    """
    if not contacts:
        return
    if index is None:
        flagged = [i for i, contact in enumerate(contacts) if contact.get("is_primary")]
        index = flagged[0] if flagged else fallback
    for position, contact in enumerate(contacts):
        contact["is_primary"] = position == index


def contact_not_found(index: int) -> Result[Any]:
    return Return.err(
        Error("CONTACT_NOT_FOUND", "Contact not found", details={"contact_index": index})
    )


class ContactUseCase:
    """Base for the use cases reading or rewriting a client's contact list"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def _load_contacts(
        self, client_id: UUID
    ) -> Result[Tuple[Client, List[Dict[str, Any]]]]:
        client = await self.uow.clients.get_by_id(client_id)
        if not client:
            return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))
        if client.client_type != ClientType.business:
            return Return.err(
                Error("CLIENT_TYPE_MISMATCH", "Only business clients have contacts")
            )
        contacts = copy.deepcopy(list((client.business_info or {}).get("contacts") or []))
        return Return.ok((client, contacts))

    async def _save_contacts(
        self,
        client: Client,
        contacts: List[Dict[str, Any]],
        actor_id: Optional[UUID],
        action: str,
        index: int,
    ) -> Result[ClientResponse]:
        validation = ClientValidationService(self.uow).validate_contacts(contacts)
        if not validation.is_valid:
            return Return.err(
                Error(
                    "VALIDATION_FAILED",
                    "Contact data validation failed",
                    details={
                        "errors": [e.model_dump(mode="json") for e in validation.errors],
                        "warnings": [w.model_dump(mode="json") for w in validation.warnings],
                    },
                )
            )

        # New object so the JSON column is flagged dirty
        client.business_info = {**(client.business_info or {}), "contacts": contacts}
        client.updated_at = utcnow()
        client = await self.uow.clients.update(client)

        await self.uow.audit_events.create(
            ClientAuditEvent(
                client_id=client.id,
                actor_id=actor_id,
                action=ClientAuditAction.updated.value,
                event_metadata={
                    "fields": ["business_info.contacts"],
                    "contact_action": action,
                    "contact_index": index,
                },
            )
        )
        await self.uow.commit()

        logger.info(f"Client {client.id}: contact {index} {action}")
        return Return.ok(ClientResponse.from_entity(client))
