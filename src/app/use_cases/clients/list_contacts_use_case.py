"""
Use Case: List Contacts

Contacts of one business client, in stored order.
"""

from uuid import UUID

from src.libs.result import Result, Return

from .contact_use_case_base import ContactUseCase
from .dtos import ContactListResponse, ContactResponse


class ListContactsUseCase(ContactUseCase):
    async def execute(
        self, client_id: UUID, primary_only: bool = False
    ) -> Result[ContactListResponse]:
        async with self.uow:
            loaded = await self._load_contacts(client_id)
            if loaded.is_err():
                return loaded
            _, contacts = loaded.value

        items = [
            ContactResponse.from_contact(index, contact)
            for index, contact in enumerate(contacts)
            if not primary_only or contact.get("is_primary")
        ]
        return Return.ok(ContactListResponse(client_id=client_id, items=items, total=len(items)))
