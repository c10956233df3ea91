"""
Use Case: Set Primary Contact

Moves the primary role to one contact; every other contact loses it.
"""

from typing import Optional
from uuid import UUID

from src.libs.result import Result

from .contact_use_case_base import ContactUseCase, contact_not_found, set_single_primary
from .dtos import ClientResponse


class SetPrimaryContactUseCase(ContactUseCase):
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

            set_single_primary(contacts, contact_index)

            return await self._save_contacts(
                client, contacts, actor_id, "set_primary", contact_index
            )
