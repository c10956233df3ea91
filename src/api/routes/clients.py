from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, raise_for_error
from src.app.services.client_validation_service import ValidationOptions, ValidationResult
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.clients import (
    AddContactUseCase,
    ClientListResponse,
    ClientResponse,
    ClientStatisticsResponse,
    ContactCommand,
    ContactListResponse,
    CreateClientUseCase,
    DeleteClientCommand,
    DeleteClientResponse,
    DeleteClientUseCase,
    GetClientStatisticsUseCase,
    GetClientUseCase,
    ListClientsQuery,
    ListClientsUseCase,
    ListContactsUseCase,
    RemoveContactUseCase,
    RestoreClientUseCase,
    SetPrimaryContactUseCase,
    UpdateClientUseCase,
    UpdateContactCommand,
    UpdateContactUseCase,
    ValidateClientUseCase,
)
from src.depends import get_current_actor, get_unit_of_work
from src.domain.entities import ClientStatus, ClientType
from src.libs.result import Error

router = APIRouter(prefix="/clients", tags=["Clients"])


def _parse_client_id(client_id: str) -> UUID:
    try:
        return UUID(client_id)
    except ValueError:
        raise ClientError(
            Error("INVALID_CLIENT_ID", "Invalid client ID format"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )


def _raise_validation_failed(result: ValidationResult):
    raise ClientError(
        Error(
            "VALIDATION_FAILED",
            "Client data validation failed",
            details={
                "errors": [e.model_dump(mode="json") for e in result.errors],
                "warnings": [w.model_dump(mode="json") for w in result.warnings],
            },
        ),
        status_code=422,
    )


class ValidateClientRequest(BaseModel):
    """
    Validate client HTTP request payload

    Validates a create payload, or an update payload when client_id is set.
    """

    data: Dict[str, Any] = Field(..., description="Client payload to validate")
    client_id: Optional[UUID] = Field(default=None, description="Client being updated")
    options: ValidationOptions = Field(default_factory=ValidationOptions)


@router.post(
    "", status_code=status.HTTP_201_CREATED, response_model=ClientResponse
)
async def create_client(
    payload: Dict[str, Any] = Body(...),
    actor_id: Optional[UUID] = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Client

    Validates the payload (structure, formats, uniqueness) and creates the
    client with default commercial terms.

    Raises:
        - 400 Bad Request: Malformed X-User-Id header
        - 409 Conflict: CREATE_FAILED (store constraint violated)
        - 422 Unprocessable Entity: VALIDATION_FAILED, INVALID_CLIENT_DATA
    """
    validation = await ValidateClientUseCase(uow).execute(payload)
    if not validation.value.is_valid:
        _raise_validation_failed(validation.value)

    result = await CreateClientUseCase(uow).execute(payload, actor_id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=ClientListResponse)
async def list_clients(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    client_status: Optional[List[ClientStatus]] = Query(None, alias="status"),
    client_type: Optional[List[ClientType]] = Query(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List live clients, newest first"""
    query = ListClientsQuery(
        page=page,
        page_size=page_size,
        statuses=client_status or [],
        client_types=client_type or [],
    )
    result = await ListClientsUseCase(uow).execute(query)
    return result.value


@router.post("/validate", status_code=status.HTTP_200_OK, response_model=ValidationResult)
async def validate_client(
    request: ValidateClientRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Validate Client Data

    Dry run of the validation pipeline. Always 200: an invalid payload
    comes back with is_valid=false and the field-level errors.
    """
    result = await ValidateClientUseCase(uow).execute(
        request.data, request.options, client_id=request.client_id
    )
    return result.value


@router.get("/{client_id}", status_code=status.HTTP_200_OK, response_model=ClientResponse)
async def get_client(
    client_id: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Client

    Raises:
        - 400 Bad Request: Invalid client_id format
        - 404 Not Found: Client missing or soft-deleted
    """
    result = await GetClientUseCase(uow).execute(_parse_client_id(client_id))
    if result.value is None:
        raise ClientError(
            Error("CLIENT_NOT_FOUND", "Client not found"),
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return result.value


@router.put("/{client_id}", status_code=status.HTTP_200_OK, response_model=ClientResponse)
async def update_client(
    client_id: str,
    payload: Dict[str, Any] = Body(...),
    actor_id: Optional[UUID] = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Client

    Partial update: only supplied sections are validated, nested objects
    are merged key by key.

    Raises:
        - 400 Bad Request: Invalid client_id format
        - 404 Not Found: CLIENT_NOT_FOUND
        - 409 Conflict: INVALID_STATUS_TRANSITION, CREDIT_LIMIT_BELOW_BALANCE,
                        CLIENT_TYPE_MISMATCH, DUPLICATE_VALUE
        - 422 Unprocessable Entity: VALIDATION_FAILED
    """
    client_uuid = _parse_client_id(client_id)

    validation = await ValidateClientUseCase(uow).execute(payload, client_id=client_uuid)
    if not validation.value.is_valid:
        _raise_validation_failed(validation.value)

    result = await UpdateClientUseCase(uow).execute(client_uuid, payload, actor_id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{client_id}", status_code=status.HTTP_200_OK, response_model=DeleteClientResponse
)
async def delete_client(
    client_id: str,
    command: Optional[DeleteClientCommand] = Body(default=None),
    actor_id: Optional[UUID] = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Client

    Soft delete by default. Active folders block the deletion unless force
    is set; handle_folders then archives them or transfers them to
    transfer_to_client_id.

    Raises:
        - 400 Bad Request: Invalid client_id format
        - 404 Not Found: CLIENT_NOT_FOUND, TRANSFER_TARGET_NOT_FOUND
        - 409 Conflict: ACTIVE_FOLDERS, TRANSFER_TARGET_REQUIRED,
                        INVALID_TRANSFER_TARGET, FOLDER_CASCADE_FAILED
    """
    result = await DeleteClientUseCase(uow).execute(
        _parse_client_id(client_id), command, actor_id
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{client_id}/restore", status_code=status.HTTP_200_OK, response_model=ClientResponse
)
async def restore_client(
    client_id: str,
    actor_id: Optional[UUID] = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Restore Client

    Clears the soft-delete fields. Restoring a live client is a no-op.

    Raises:
        - 404 Not Found: CLIENT_NOT_FOUND (never existed or hard-deleted)
        - 409 Conflict: DUPLICATE_VALUE
    """
    result = await RestoreClientUseCase(uow).execute(_parse_client_id(client_id), actor_id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{client_id}/statistics",
    status_code=status.HTTP_200_OK,
    response_model=ClientStatisticsResponse,
)
async def get_client_statistics(
    client_id: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Folder counts and commercial figures of one client"""
    result = await GetClientStatisticsUseCase(uow).execute(_parse_client_id(client_id))
    if result.is_err():
        raise_for_error(result.error)

    return result.value


# ============================================================================
# Contacts of business clients, addressed by position in the list
# ============================================================================


@router.get(
    "/{client_id}/contacts", status_code=status.HTTP_200_OK, response_model=ContactListResponse
)
async def list_contacts(
    client_id: str,
    primary_only: bool = Query(False),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Contacts

    Raises:
        - 400 Bad Request: Invalid client_id format
        - 404 Not Found: CLIENT_NOT_FOUND
        - 409 Conflict: CLIENT_TYPE_MISMATCH (individual client)
    """
    result = await ListContactsUseCase(uow).execute(_parse_client_id(client_id), primary_only)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{client_id}/contacts", status_code=status.HTTP_201_CREATED, response_model=ClientResponse
)
async def add_contact(
    client_id: str,
    command: ContactCommand,
    actor_id: Optional[UUID] = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add Contact

    Appends a contact. With is_primary the new contact becomes the only
    primary one.

    Raises:
        - 404 Not Found: CLIENT_NOT_FOUND
        - 409 Conflict: CLIENT_TYPE_MISMATCH
        - 422 Unprocessable Entity: VALIDATION_FAILED
    """
    result = await AddContactUseCase(uow).execute(_parse_client_id(client_id), command, actor_id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put(
    "/{client_id}/contacts/{contact_index}",
    status_code=status.HTTP_200_OK,
    response_model=ClientResponse,
)
async def update_contact(
    client_id: str,
    contact_index: int,
    command: UpdateContactCommand,
    actor_id: Optional[UUID] = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Contact

    Raises:
        - 404 Not Found: CLIENT_NOT_FOUND, CONTACT_NOT_FOUND
        - 409 Conflict: CLIENT_TYPE_MISMATCH
        - 422 Unprocessable Entity: VALIDATION_FAILED
    """
    result = await UpdateContactUseCase(uow).execute(
        _parse_client_id(client_id), contact_index, command, actor_id
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{client_id}/contacts/{contact_index}",
    status_code=status.HTTP_200_OK,
    response_model=ClientResponse,
)
async def remove_contact(
    client_id: str,
    contact_index: int,
    actor_id: Optional[UUID] = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Contact

    Raises:
        - 404 Not Found: CLIENT_NOT_FOUND, CONTACT_NOT_FOUND
        - 409 Conflict: CLIENT_TYPE_MISMATCH, LAST_CONTACT
    """
    result = await RemoveContactUseCase(uow).execute(
        _parse_client_id(client_id), contact_index, actor_id
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{client_id}/contacts/{contact_index}/primary",
    status_code=status.HTTP_200_OK,
    response_model=ClientResponse,
)
async def set_primary_contact(
    client_id: str,
    contact_index: int,
    actor_id: Optional[UUID] = Depends(get_current_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Make one contact the primary contact"""
    result = await SetPrimaryContactUseCase(uow).execute(
        _parse_client_id(client_id), contact_index, actor_id
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value
