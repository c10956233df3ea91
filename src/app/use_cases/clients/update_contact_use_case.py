"""
Use Case: Update Contact

Partial update of one contact of a business client.
"""

from typing import Optional
from uuid import UUID

from src.libs.result import Result

from .contact_use_case_base import ContactUseCase, contact_not_found, set_single_primary
from .dtos import ClientResponse, UpdateContactCommand


class UpdateContactUseCase(ContactUseCase):
    """
    Update a contact in place.

    Business Logic:
    1. Load the client (live business clients only)
    2. Merge the sent fields into the contact at contact_index
    3. is_primary=true moves the primary role to this contact;
       is_primary=false on the primary hands it to the first other contact
    4. Validate the whole list, save, create audit event
    """

    async def execute(
        self,
        client_id: UUID,
        contact_index: int,
        command: UpdateContactCommand,
        actor_id: Optional[UUID] = None,
    ) -> Result[ClientResponse]:
        async with self.uow:
            loaded = await self._load_contacts(client_id)
            if loaded.is_err():
                return loaded
            client, contacts = loaded.value

            if not 0 <= contact_index < len(contacts):
                return contact_not_found(contact_index)

            updates = command.model_dump(mode="json", exclude_unset=True)
            contacts[contact_index] = {**contacts[contact_index], **updates}

            if updates.get("is_primary"):
                set_single_primary(contacts, contact_index)
            else:
                others = [i for i in range(len(contacts)) if i != contact_index]
                set_single_primary(contacts, fallback=others[0] if others else contact_index)

            return await self._save_contacts(client, contacts, actor_id, "updated", contact_index)
