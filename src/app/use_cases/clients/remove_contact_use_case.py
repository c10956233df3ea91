"""
Use Case: Remove Contact

Removes one contact of a business client. The last contact cannot be
removed; removing the primary contact promotes the first remaining one.
"""

from typing import Optional
from uuid import UUID

from src.libs.result import Error, Result, Return

from .contact_use_case_base import ContactUseCase, contact_not_found, set_single_primary
from .dtos import ClientResponse


class RemoveContactUseCase(ContactUseCase):
    async def execute(
        self,
        client_id: UUID,
        contact_index: int,
        actor_id: Optional[UUID] = None,
    ) -> Result[ClientResponse]:
        async with self.uow:
            loaded = await self._load_contacts(client_id)
            if loaded.is_err():
                return loaded
            client, contacts = loaded.value

            if not 0 <= contact_index < len(contacts):
                return contact_not_found(contact_index)
            if len(contacts) == 1:
                return Return.err(
                    Error(
                        "LAST_CONTACT",
                        "A business client must keep at least one contact",
                        details={"contact_index": contact_index},
                    )
                )

            contacts.pop(contact_index)
            set_single_primary(contacts)

            return await self._save_contacts(client, contacts, actor_id, "removed", contact_index)
