"""
Use Case: Add Contact

Appends a contact person to a business client.
"""

from typing import Optional
from uuid import UUID

from src.libs.result import Result

from .contact_use_case_base import ContactUseCase, set_single_primary
from .dtos import ClientResponse, ContactCommand


class AddContactUseCase(ContactUseCase):
    """
    Add a contact to a business client.

    Business Logic:
    1. Load the client (live business clients only)
    2. Append the contact
    3. A contact sent with is_primary takes the role from the current
       primary; the first contact of an empty list is always primary
    4. Validate the whole list, save, create audit event
    """

    async def execute(
        self,
        client_id: UUID,
        command: ContactCommand,
        actor_id: Optional[UUID] = None,
    ) -> Result[ClientResponse]:
        async with self.uow:
            loaded = await self._load_contacts(client_id)
            if loaded.is_err():
                return loaded
            client, contacts = loaded.value

            contacts.append(command.model_dump(mode="json", exclude_none=True))
            index = len(contacts) - 1
            set_single_primary(contacts, index if command.is_primary else None)

            return await self._save_contacts(client, contacts, actor_id, "added", index)
