"""
Unit tests for DeleteClientUseCase

Tests the active-folder guard, folder cascade and both deletion types
with mocked repositories.
"""

import pytest
from uuid import uuid4
from unittest.mock import AsyncMock
from sqlalchemy.exc import OperationalError
from src.app.use_cases.clients import DeleteClientCommand, DeleteClientUseCase
from src.domain.entities import (
    Client,
    ClientStatus,
    ClientType,
    DeletionType,
    Folder,
    FolderHandling,
    FolderStatus,
)


def make_client(**kwargs) -> Client:
    return Client(
        id=kwargs.pop("id", uuid4()),
        client_type=ClientType.individual,
        email="marie.dupont@acme-logistics.com",
        individual_info={"first_name": "Marie", "last_name": "Dupont"},
        contact_info={"email": "marie.dupont@acme-logistics.com"},
        **kwargs,
    )


def setup_folders(mock_uow, client_id, count):
    folders = [Folder(client_id=client_id, title=f"Shipment {i}") for i in range(count)]
    mock_uow.folders.count_by_client_id = AsyncMock(return_value=count)
    mock_uow.folders.get_by_client_id = AsyncMock(return_value=folders)
    mock_uow.folders.update = AsyncMock(side_effect=lambda folder: folder)
    return folders


@pytest.mark.asyncio
async def test_soft_delete_without_folders(mock_uow):
    """Soft delete marks the client and records the actor"""
    client = make_client()
    actor_id = uuid4()
    mock_uow.clients.get_by_id = AsyncMock(return_value=client)
    mock_uow.clients.update = AsyncMock(return_value=client)
    setup_folders(mock_uow, client.id, 0)

    result = await DeleteClientUseCase(mock_uow).execute(
        client.id, DeleteClientCommand(reason="Duplicate account"), actor_id
    )

    assert result.is_ok()
    response = result.value
    assert response.success is True
    assert response.deletion_type == DeletionType.soft
    assert response.affected_folders_count == 0
    assert response.folder_actions == []

    assert client.deleted_at is not None
    assert client.deleted_by == actor_id
    assert client.deletion_reason == "Duplicate account"
    assert client.status == ClientStatus.deleted
    assert mock_uow.clients.update.await_count == 1
    mock_uow.folders.get_by_client_id.assert_not_awaited()

    audit_event = mock_uow.audit_events.create.await_args[0][0]
    assert audit_event.action == "deleted"
    assert audit_event.event_metadata["previous_status"] == "active"
    assert mock_uow.commit.await_count == 1


@pytest.mark.asyncio
async def test_delete_client_not_found(mock_uow):
    mock_uow.clients.get_by_id = AsyncMock(return_value=None)

    result = await DeleteClientUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "CLIENT_NOT_FOUND"


@pytest.mark.asyncio
async def test_active_folders_block_unforced_deletion(mock_uow):
    client = make_client()
    mock_uow.clients.get_by_id = AsyncMock(return_value=client)
    mock_uow.clients.update = AsyncMock()
    setup_folders(mock_uow, client.id, 2)

    result = await DeleteClientUseCase(mock_uow).execute(client.id)

    assert result.is_err()
    assert result.error.code == "ACTIVE_FOLDERS"
    assert "active folders" in result.error.message
    assert result.error.details == {"active_folders_count": 2}
    mock_uow.clients.update.assert_not_awaited()
    mock_uow.folders.update.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()
    assert client.deleted_at is None


@pytest.mark.asyncio
async def test_forced_deletion_archives_folders(mock_uow):
    client = make_client()
    mock_uow.clients.get_by_id = AsyncMock(return_value=client)
    mock_uow.clients.update = AsyncMock(return_value=client)
    folders = setup_folders(mock_uow, client.id, 2)

    result = await DeleteClientUseCase(mock_uow).execute(
        client.id,
        DeleteClientCommand(force=True, handle_folders=FolderHandling.archive),
    )

    assert result.is_ok()
    assert result.value.affected_folders_count == 2
    assert [a.action.value for a in result.value.folder_actions] == ["archived", "archived"]
    assert all(folder.status == FolderStatus.archived for folder in folders)
    mock_uow.folders.get_by_client_id.assert_awaited_once_with(client.id, [FolderStatus.active])
    # One commit per folder plus the deletion itself
    assert mock_uow.commit.await_count == 3


@pytest.mark.asyncio
async def test_forced_deletion_transfers_folders(mock_uow):
    client = make_client()
    target = make_client()
    mock_uow.clients.get_by_id = AsyncMock(side_effect=[client, target])
    mock_uow.clients.update = AsyncMock(return_value=client)
    folders = setup_folders(mock_uow, client.id, 1)

    result = await DeleteClientUseCase(mock_uow).execute(
        client.id,
        DeleteClientCommand(
            force=True,
            handle_folders=FolderHandling.transfer,
            transfer_to_client_id=target.id,
        ),
    )

    assert result.is_ok()
    action = result.value.folder_actions[0]
    assert action.action.value == "transferred"
    assert action.target_client_id == target.id
    assert folders[0].client_id == target.id
    assert folders[0].status == FolderStatus.active


@pytest.mark.asyncio
async def test_forced_deletion_without_handling_leaves_folders(mock_uow):
    client = make_client()
    mock_uow.clients.get_by_id = AsyncMock(return_value=client)
    mock_uow.clients.update = AsyncMock(return_value=client)
    setup_folders(mock_uow, client.id, 3)

    result = await DeleteClientUseCase(mock_uow).execute(
        client.id, DeleteClientCommand(force=True)
    )

    assert result.is_ok()
    assert result.value.affected_folders_count == 3
    assert result.value.folder_actions == []
    mock_uow.folders.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_transfer_requires_target(mock_uow):
    client = make_client()
    mock_uow.clients.get_by_id = AsyncMock(return_value=client)
    setup_folders(mock_uow, client.id, 1)

    result = await DeleteClientUseCase(mock_uow).execute(
        client.id, DeleteClientCommand(force=True, handle_folders=FolderHandling.transfer)
    )

    assert result.is_err()
    assert result.error.code == "TRANSFER_TARGET_REQUIRED"


@pytest.mark.asyncio
async def test_transfer_to_itself_is_rejected(mock_uow):
    client = make_client()
    mock_uow.clients.get_by_id = AsyncMock(return_value=client)
    setup_folders(mock_uow, client.id, 1)

    result = await DeleteClientUseCase(mock_uow).execute(
        client.id,
        DeleteClientCommand(
            force=True,
            handle_folders=FolderHandling.transfer,
            transfer_to_client_id=client.id,
        ),
    )

    assert result.is_err()
    assert result.error.code == "INVALID_TRANSFER_TARGET"
    mock_uow.folders.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_transfer_target_must_exist(mock_uow):
    client = make_client()
    mock_uow.clients.get_by_id = AsyncMock(side_effect=[client, None])
    setup_folders(mock_uow, client.id, 1)

    result = await DeleteClientUseCase(mock_uow).execute(
        client.id,
        DeleteClientCommand(
            force=True,
            handle_folders=FolderHandling.transfer,
            transfer_to_client_id=uuid4(),
        ),
    )

    assert result.is_err()
    assert result.error.code == "TRANSFER_TARGET_NOT_FOUND"
    mock_uow.folders.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_cascade_failure_keeps_client_and_reports_done_actions(mock_uow):
    client = make_client()
    mock_uow.clients.get_by_id = AsyncMock(return_value=client)
    mock_uow.clients.update = AsyncMock()
    mock_uow.clients.delete = AsyncMock()
    folders = setup_folders(mock_uow, client.id, 3)
    mock_uow.folders.update = AsyncMock(
        side_effect=[folders[0], OperationalError("UPDATE folders", {}, Exception("disk I/O error"))]
    )

    result = await DeleteClientUseCase(mock_uow).execute(
        client.id,
        DeleteClientCommand(
            deletion_type=DeletionType.hard,
            force=True,
            handle_folders=FolderHandling.archive,
        ),
    )

    assert result.is_err()
    assert result.error.code == "FOLDER_CASCADE_FAILED"
    done = result.error.details["folder_actions"]
    assert len(done) == 1
    assert done[0]["folder_id"] == str(folders[0].id)
    mock_uow.clients.delete.assert_not_awaited()
    mock_uow.clients.update.assert_not_awaited()
    assert mock_uow.rollback.await_count == 1


@pytest.mark.asyncio
async def test_hard_delete_removes_row(mock_uow):
    client = make_client()
    mock_uow.clients.get_by_id = AsyncMock(return_value=client)
    mock_uow.clients.delete = AsyncMock()
    mock_uow.clients.update = AsyncMock()
    setup_folders(mock_uow, client.id, 0)

    result = await DeleteClientUseCase(mock_uow).execute(
        client.id, DeleteClientCommand(deletion_type=DeletionType.hard)
    )

    assert result.is_ok()
    assert result.value.deletion_type == DeletionType.hard
    mock_uow.clients.delete.assert_awaited_once_with(client)
    mock_uow.clients.update.assert_not_awaited()
