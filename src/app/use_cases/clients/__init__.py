"""
Client Lifecycle Use Cases

Single-client create, read, update, delete, restore and statistics, plus
contact management for business clients.
"""

from .add_contact_use_case import AddContactUseCase
from .create_client_use_case import CreateClientUseCase
from .delete_client_use_case import DeleteClientUseCase
from .dtos import (
    BusinessInfo,
    ClientListResponse,
    ClientResponse,
    ClientStatisticsResponse,
    CommercialInfo,
    ContactCommand,
    ContactInfo,
    ContactListResponse,
    ContactResponse,
    CreateBusinessClientCommand,
    CreateClientCommand,
    CreateIndividualClientCommand,
    DeleteClientCommand,
    DeleteClientResponse,
    FolderActionInfo,
    IndividualInfo,
    ListClientsQuery,
    UpdateContactCommand,
)
from .get_client_statistics_use_case import GetClientStatisticsUseCase
from .get_client_use_case import GetClientUseCase
from .list_clients_use_case import ListClientsUseCase
from .list_contacts_use_case import ListContactsUseCase
from .remove_contact_use_case import RemoveContactUseCase
from .restore_client_use_case import RestoreClientUseCase
from .set_primary_contact_use_case import SetPrimaryContactUseCase
from .update_client_use_case import UpdateClientUseCase
from .update_contact_use_case import UpdateContactUseCase
from .validate_client_use_case import ValidateClientUseCase

__all__ = [
    "CreateClientUseCase",
    "GetClientUseCase",
    "ListClientsUseCase",
    "UpdateClientUseCase",
    "DeleteClientUseCase",
    "RestoreClientUseCase",
    "GetClientStatisticsUseCase",
    "ValidateClientUseCase",
    "AddContactUseCase",
    "UpdateContactUseCase",
    "RemoveContactUseCase",
    "SetPrimaryContactUseCase",
    "ListContactsUseCase",
    "CreateClientCommand",
    "CreateIndividualClientCommand",
    "CreateBusinessClientCommand",
    "DeleteClientCommand",
    "ListClientsQuery",
    "IndividualInfo",
    "BusinessInfo",
    "ContactInfo",
    "CommercialInfo",
    "ClientResponse",
    "ClientListResponse",
    "DeleteClientResponse",
    "FolderActionInfo",
    "ClientStatisticsResponse",
    "ContactCommand",
    "UpdateContactCommand",
    "ContactResponse",
    "ContactListResponse",
]
