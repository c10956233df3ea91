"""
Unit tests for RestoreClientUseCase
"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock
from uuid import uuid4
from src.app.use_cases.clients import RestoreClientUseCase
from src.domain.entities import Client, ClientAuditEvent, ClientStatus, ClientType


def make_deleted_client() -> Client:
    return Client(
        id=uuid4(),
        client_type=ClientType.individual,
        status=ClientStatus.deleted,
        email="marie.dupont@acme-logistics.com",
        individual_info={"first_name": "Marie", "last_name": "Dupont"},
        contact_info={"email": "marie.dupont@acme-logistics.com"},
        deleted_at=datetime(2025, 3, 1, 12, 0),
        deleted_by=uuid4(),
        deletion_reason="Closed account",
    )


@pytest.mark.asyncio
async def test_restore_puts_back_previous_status(mock_uow):
    client = make_deleted_client()
    mock_uow.clients.get_by_id = AsyncMock(return_value=client)
    mock_uow.clients.update = AsyncMock(side_effect=lambda c: c)
    mock_uow.audit_events.get_by_client_id = AsyncMock(
        return_value=[
            ClientAuditEvent(client_id=client.id, action="created"),
            ClientAuditEvent(
                client_id=client.id,
                action="deleted",
                event_metadata={"previous_status": "inactive"},
            ),
        ]
    )

    result = await RestoreClientUseCase(mock_uow).execute(client.id)

    assert result.is_ok()
    assert client.status == ClientStatus.inactive
    assert client.deleted_at is None
    assert client.deleted_by is None
    assert client.deletion_reason is None
    mock_uow.clients.get_by_id.assert_awaited_once_with(client.id, include_deleted=True)
    assert mock_uow.audit_events.create.await_args[0][0].action == "restored"


@pytest.mark.asyncio
async def test_restore_live_client_is_noop(mock_uow):
    client = make_deleted_client()
    client.deleted_at = None
    client.status = ClientStatus.active
    mock_uow.clients.get_by_id = AsyncMock(return_value=client)
    mock_uow.clients.update = AsyncMock()

    result = await RestoreClientUseCase(mock_uow).execute(client.id)

    assert result.is_ok()
    mock_uow.clients.update.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_restore_blocked_by_taken_email(mock_uow):
    client = make_deleted_client()
    other = Client(id=uuid4(), client_type=ClientType.individual, email=client.email)
    mock_uow.clients.get_by_id = AsyncMock(return_value=client)
    mock_uow.clients.find_by_email = AsyncMock(return_value=[other])
    mock_uow.clients.update = AsyncMock()

    result = await RestoreClientUseCase(mock_uow).execute(client.id)

    assert result.is_err()
    assert result.error.code == "DUPLICATE_VALUE"
    assert client.deleted_at is not None
    mock_uow.clients.update.assert_not_awaited()
