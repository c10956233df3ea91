"""
Unit tests for the batch use cases and the batch dispatcher

Repositories are mocked; the real BatchRunner drives every item.
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4
from src.app.use_cases.batch import (
    BatchCreateClientsUseCase,
    BatchDeleteClientsUseCase,
    BatchRequest,
    BatchRunner,
    BatchTagsUseCase,
    BatchUpdateStatusUseCase,
    ExecuteBatchUseCase,
)
from src.domain.base import utcnow
from src.domain.entities import BatchOperationType, Client, ClientStatus, ClientType


def make_client(status=ClientStatus.active, tags=None) -> Client:
    return Client(
        id=uuid4(),
        client_type=ClientType.individual,
        status=status,
        email=f"{uuid4().hex[:8]}@acme-logistics.com",
        individual_info={"first_name": "Marie", "last_name": "Dupont"},
        contact_info={"email": "marie.dupont@acme-logistics.com"},
        tags=tags or [],
    )


def setup_clients(mock_uow, clients):
    by_id = {client.id: client for client in clients}
    mock_uow.clients.get_by_id = AsyncMock(side_effect=lambda client_id, **kwargs: by_id.get(client_id))
    mock_uow.clients.update = AsyncMock(side_effect=lambda client: client)


@pytest.mark.asyncio
async def test_batch_create_reports_invalid_payload_and_creates_the_rest(mock_uow, test_data):
    mock_uow.clients.create = AsyncMock(side_effect=lambda client: client)
    items = [
        test_data.client_payload("individual_client", email="a@acme-logistics.com"),
        test_data.client_payload("individual_client", email="invalid-email"),
        test_data.client_payload("minimal_individual_client", email="b@acme-logistics.com"),
    ]

    result = await BatchCreateClientsUseCase(mock_uow).execute(items)

    assert result.is_ok()
    batch = result.value
    assert batch.successful_count == 2
    assert batch.failed_count == 1
    assert batch.success is False
    failure = batch.failed_operations[0]
    assert failure.error_details["code"] == "VALIDATION_FAILED"
    assert failure.input_data["contact_info"]["email"] == "invalid-email"
    assert all(op.client_id is not None for op in batch.successful_operations)
    assert mock_uow.clients.create.await_count == 2


@pytest.mark.asyncio
async def test_batch_create_rejects_non_object_item(mock_uow, test_data):
    result = await BatchCreateClientsUseCase(mock_uow).execute(
        [test_data.get_copy("individual_client"), "not-an-object"]
    )

    assert result.is_err()
    assert result.error.code == "INVALID_BATCH"


@pytest.mark.asyncio
async def test_add_tags_twice_writes_once(mock_uow):
    client = make_client(tags=["vip"])
    setup_clients(mock_uow, [client])
    use_case = BatchTagsUseCase(mock_uow)

    first = await use_case.execute(BatchOperationType.add_tags, [client.id], ["north"])
    second = await use_case.execute(BatchOperationType.add_tags, [client.id], ["north"])

    assert first.value.successful_count == 1
    assert second.value.successful_count == 1
    assert client.tags == ["vip", "north"]
    assert mock_uow.clients.update.await_count == 1


@pytest.mark.asyncio
async def test_remove_absent_tag_succeeds_without_write(mock_uow):
    client = make_client(tags=["vip"])
    setup_clients(mock_uow, [client])

    result = await BatchTagsUseCase(mock_uow).execute(
        BatchOperationType.remove_tags, [client.id], ["absent"]
    )

    assert result.value.successful_count == 1
    assert client.tags == ["vip"]
    mock_uow.clients.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_tag_batch_reports_missing_client(mock_uow):
    client = make_client()
    setup_clients(mock_uow, [client])
    missing_id = uuid4()

    result = await BatchTagsUseCase(mock_uow).execute(
        BatchOperationType.add_tags, [client.id, missing_id], ["north"]
    )

    assert result.value.successful_count == 1
    assert result.value.failed_operations[0].client_id == missing_id
    assert result.value.failed_operations[0].error_details["code"] == "CLIENT_NOT_FOUND"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "operation,tags",
    [
        (BatchOperationType.add_tags, []),
        (BatchOperationType.add_tags, ["ok", ""]),
        (BatchOperationType.remove_tags, "vip"),
    ],
)
async def test_tag_batch_rejects_bad_tags(mock_uow, operation, tags):
    result = await BatchTagsUseCase(mock_uow).execute(operation, [uuid4()], tags)

    assert result.is_err()
    assert result.error.code == "INVALID_BATCH"


@pytest.mark.asyncio
async def test_status_batch_fails_illegal_transition_per_item(mock_uow):
    active = make_client(status=ClientStatus.active)
    pending = make_client(status=ClientStatus.pending)
    setup_clients(mock_uow, [active, pending])

    result = await BatchUpdateStatusUseCase(mock_uow).execute(
        [active.id, pending.id], "inactive"
    )

    batch = result.value
    assert batch.successful_count == 1
    assert batch.failed_count == 1
    assert active.status == ClientStatus.inactive
    assert pending.status == ClientStatus.pending
    failure = batch.failed_operations[0]
    assert failure.client_id == pending.id
    assert failure.error_details["code"] == "INVALID_STATUS_TRANSITION"


@pytest.mark.asyncio
async def test_status_batch_rejects_unknown_status(mock_uow):
    result = await BatchUpdateStatusUseCase(mock_uow).execute([uuid4()], "archived")

    assert result.is_err()
    assert result.error.code == "INVALID_BATCH"


@pytest.mark.asyncio
async def test_dispatcher_rejects_unknown_operation(mock_uow):
    result = await ExecuteBatchUseCase(mock_uow).execute(
        BatchRequest(operation="merge", client_ids=[str(uuid4())])
    )

    assert result.is_err()
    assert result.error.code == "UNSUPPORTED_OPERATION"
    assert "add_tags" in result.error.details["supported"]


@pytest.mark.asyncio
async def test_dispatcher_requires_new_status(mock_uow):
    result = await ExecuteBatchUseCase(mock_uow).execute(
        BatchRequest(operation="update_status", client_ids=[str(uuid4())])
    )

    assert result.is_err()
    assert result.error.code == "INVALID_BATCH"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"handle_folders": "shred"},
        {"deletion_type": "purge"},
        {"force": True, "handle_folders": "transfer"},
    ],
)
async def test_dispatcher_rejects_bad_deletion_parameters(mock_uow, params):
    mock_uow.clients.get_by_id = AsyncMock()

    result = await ExecuteBatchUseCase(mock_uow).execute(
        BatchRequest(operation="delete", client_ids=[str(uuid4())], **params)
    )

    assert result.is_err()
    assert result.error.code == "INVALID_BATCH"
    mock_uow.clients.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_batch_preflight_flags_deleted_clients_and_active_folders(mock_uow):
    live = make_client()
    busy = make_client()
    gone = make_client(status=ClientStatus.deleted)
    gone.deleted_at = utcnow()
    setup_clients(mock_uow, [live, busy])
    mock_uow.clients.get_by_ids = AsyncMock(return_value=[live, busy, gone])
    mock_uow.folders.count_active_by_client_ids = AsyncMock(return_value={busy.id: 2})
    mock_uow.folders.count_by_client_id = AsyncMock(
        side_effect=lambda client_id, status=None: 2 if client_id == busy.id else 0
    )

    result = await BatchDeleteClientsUseCase(mock_uow).execute([live.id, busy.id, gone.id])

    batch = result.value
    assert batch.successful_count == 1
    assert batch.successful_operations[0].client_id == live.id
    codes = {op.client_id: op.error_details["code"] for op in batch.failed_operations}
    assert codes == {busy.id: "ACTIVE_FOLDERS", gone.id: "DELETED_CLIENT"}
    assert batch.warnings == [f"ACTIVE_FOLDERS: client {busy.id} has 2 active folder(s)"]
    mock_uow.clients.get_by_ids.assert_awaited_once_with(
        [live.id, busy.id, gone.id], include_deleted=True
    )


@pytest.mark.asyncio
async def test_dispatcher_rejects_oversized_batch_before_any_work(mock_uow):
    mock_uow.clients.get_by_id = AsyncMock()
    runner = BatchRunner(max_size=2)

    result = await ExecuteBatchUseCase(mock_uow, runner).execute(
        BatchRequest(
            operation="add_tags",
            client_ids=[str(uuid4()) for _ in range(3)],
            tags=["vip"],
        )
    )

    assert result.is_err()
    assert result.error.code == "BATCH_SIZE_EXCEEDED"
    mock_uow.clients.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_dispatcher_routes_update_status(mock_uow):
    client = make_client(status=ClientStatus.inactive)
    setup_clients(mock_uow, [client])

    result = await ExecuteBatchUseCase(mock_uow).execute(
        BatchRequest(operation="update_status", client_ids=[str(client.id)], new_status="active")
    )

    assert result.is_ok()
    assert result.value.successful_operations[0].operation_type == BatchOperationType.update_status
    assert client.status == ClientStatus.active
