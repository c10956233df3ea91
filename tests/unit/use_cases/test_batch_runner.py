"""
Unit tests for BatchRunner

Tests per-item isolation, chunking, progress reporting and cancellation
with plain async handlers.
"""

import asyncio

import pytest
from uuid import uuid4
from src.app.use_cases.batch import (
    BatchRunner,
    CancellationToken,
    apply_tag_operation,
    parse_client_ids,
)
from src.app.use_cases.batch.dtos import BatchItem, BatchItemOutcome
from src.domain.entities import BatchItemStatus, BatchOperationType
from src.libs.result import Error, Return


def make_items(count):
    return [BatchItem(input_data={"index": i}, client_id=uuid4()) for i in range(count)]


async def succeed(item):
    return Return.ok(BatchItemOutcome(client_id=item.client_id))


@pytest.mark.asyncio
async def test_run_all_items_succeed():
    items = make_items(3)

    result = await BatchRunner().run(BatchOperationType.update, items, succeed)

    assert result.success is True
    assert result.total_processed == 3
    assert result.successful_count == 3
    assert result.failed_count == 0
    assert result.warnings == []
    assert result.cancelled is False
    assert [op.client_id for op in result.successful_operations] == [i.client_id for i in items]
    assert all(op.status == BatchItemStatus.success for op in result.successful_operations)
    assert len({op.id for op in result.successful_operations}) == 3


@pytest.mark.asyncio
async def test_error_result_fails_only_that_item():
    items = make_items(3)

    async def handler(item):
        if item.input_data["index"] == 1:
            return Return.err(
                Error("CLIENT_NOT_FOUND", "Client not found", details={"hint": "gone"})
            )
        return await succeed(item)

    result = await BatchRunner().run(BatchOperationType.update, items, handler)

    assert result.success is False
    assert result.successful_count == 2
    assert result.failed_count == 1
    failure = result.failed_operations[0]
    assert failure.status == BatchItemStatus.error
    assert failure.client_id == items[1].client_id
    assert failure.error == "Client not found"
    assert failure.error_details == {"code": "CLIENT_NOT_FOUND", "hint": "gone"}
    assert failure.input_data == {"index": 1}


@pytest.mark.asyncio
async def test_exception_is_isolated():
    items = make_items(3)

    async def handler(item):
        if item.input_data["index"] == 0:
            raise RuntimeError("connection reset")
        return await succeed(item)

    result = await BatchRunner().run(BatchOperationType.delete, items, handler)

    assert result.total_processed == 3
    assert result.successful_count == 2
    failure = result.failed_operations[0]
    assert failure.error == "connection reset"
    assert failure.error_details["code"] == "UNEXPECTED_ERROR"
    assert failure.error_details["exception"] == "RuntimeError"


@pytest.mark.asyncio
async def test_counts_always_add_up():
    items = make_items(10)

    async def handler(item):
        if item.input_data["index"] % 3 == 0:
            return Return.err(Error("VALIDATION_FAILED", "Invalid"))
        return await succeed(item)

    result = await BatchRunner().run(BatchOperationType.create, items, handler)

    assert result.total_processed == result.successful_count + result.failed_count == 10
    assert result.failed_count == 4


@pytest.mark.asyncio
async def test_cancellation_stops_before_next_item():
    items = make_items(20)
    token = CancellationToken()
    handled = []

    async def handler(item):
        handled.append(item.input_data["index"])
        return await succeed(item)

    def on_progress(progress, cancellation_token):
        if progress.completed == 5:
            cancellation_token.cancel()

    result = await BatchRunner(chunk_size=3).run(
        BatchOperationType.update,
        items,
        handler,
        progress_callback=on_progress,
        cancellation_token=token,
    )

    assert result.cancelled is True
    assert result.total_processed == 5
    assert handled == [0, 1, 2, 3, 4]


@pytest.mark.asyncio
async def test_pre_cancelled_token_processes_nothing():
    token = CancellationToken()
    token.cancel()

    result = await BatchRunner().run(
        BatchOperationType.update, make_items(4), succeed, cancellation_token=token
    )

    assert result.cancelled is True
    assert result.total_processed == 0
    assert result.success is True


@pytest.mark.asyncio
async def test_cancellation_from_worker_thread():
    token = CancellationToken()

    async def handler(item):
        if item.input_data["index"] == 1:
            await asyncio.to_thread(token.cancel)
        return await succeed(item)

    result = await BatchRunner().run(
        BatchOperationType.update, make_items(6), handler, cancellation_token=token
    )

    assert token.cancelled is True
    assert result.cancelled is True
    assert result.total_processed == 2


@pytest.mark.asyncio
async def test_async_progress_callback_receives_every_step():
    reports = []

    async def on_progress(progress, token):
        reports.append((progress.completed, progress.total, progress.percentage))

    await BatchRunner().run(
        BatchOperationType.update, make_items(4), succeed, progress_callback=on_progress
    )

    assert reports == [(1, 4, 25.0), (2, 4, 50.0), (3, 4, 75.0), (4, 4, 100.0)]


@pytest.mark.asyncio
async def test_large_batch_is_chunked_with_warning():
    items = make_items(5)

    result = await BatchRunner(chunk_size=2).run(BatchOperationType.update, items, succeed)

    assert result.total_processed == 5
    assert result.warnings == ["Large batch of 5 items processed in 3 chunks of up to 2"]
    # Chunking keeps submission order
    assert [op.client_id for op in result.successful_operations] == [i.client_id for i in items]


def test_check_size():
    runner = BatchRunner(max_size=3)

    assert runner.check_size(3) is None
    error = runner.check_size(4)
    assert error.code == "BATCH_SIZE_EXCEEDED"
    assert error.details == {"size": 4, "max_size": 3}


def test_parse_client_ids_accepts_strings_and_uuids():
    first, second = uuid4(), uuid4()

    result = parse_client_ids([str(first), second])

    assert result.is_ok()
    assert result.value == [first, second]


@pytest.mark.parametrize(
    "raw_ids",
    [
        [],
        None,
        "not-a-list",
        ["not-a-uuid"],
    ],
)
def test_parse_client_ids_rejects_bad_lists(raw_ids):
    result = parse_client_ids(raw_ids)

    assert result.is_err()
    assert result.error.code == "INVALID_BATCH"


def test_parse_client_ids_rejects_duplicates():
    client_id = uuid4()

    result = parse_client_ids([client_id, str(client_id)])

    assert result.is_err()
    assert result.error.details == {"index": 1, "value": str(client_id)}


def test_apply_tag_operation():
    current = ["vip", "north"]

    assert apply_tag_operation(BatchOperationType.add_tags, current, ["north", "wholesale"]) == [
        "vip",
        "north",
        "wholesale",
    ]
    assert apply_tag_operation(BatchOperationType.remove_tags, current, ["vip", "absent"]) == [
        "north"
    ]
    assert apply_tag_operation(BatchOperationType.replace_tags, current, ["a", "a", "b"]) == [
        "a",
        "b",
    ]
    assert apply_tag_operation(BatchOperationType.replace_tags, current, []) == []
