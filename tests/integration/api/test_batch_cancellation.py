"""
Integration tests for batch progress reporting and cancellation

Drives the batch use cases directly against the database so the callback
and token can be observed from the test.
"""

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.use_cases.batch import (
    BatchCreateClientsUseCase,
    BatchRunner,
    BatchTagsUseCase,
    CancellationToken,
)
from src.app.use_cases.clients import ListClientsQuery, ListClientsUseCase
from src.domain.entities import BatchOperationType, Client


def bulk_payloads(test_data, count: int) -> list:
    return [
        test_data.client_payload("minimal_individual_client", email=f"bulk{i}@acme-logistics.com")
        for i in range(count)
    ]


@pytest.mark.asyncio
async def test_cancelled_create_batch_keeps_completed_items(uow, test_data):
    token = CancellationToken()

    def cancel_after_five(progress, cancellation_token):
        if progress.completed == 5:
            cancellation_token.cancel()

    result = await BatchCreateClientsUseCase(uow).execute(
        bulk_payloads(test_data, 20),
        progress_callback=cancel_after_five,
        cancellation_token=token,
    )

    batch = result.value
    assert batch.cancelled is True
    assert batch.successful_count + batch.failed_count == 5
    assert batch.successful_count == 5

    listed = await ListClientsUseCase(uow).execute(ListClientsQuery(page_size=100))
    assert listed.value.total == 5
    assert sorted(item.contact_info["email"] for item in listed.value.items) == [
        f"bulk{i}@acme-logistics.com" for i in range(5)
    ]


@pytest.mark.asyncio
async def test_cancelled_tag_batch_leaves_rest_untouched(uow, db_session: AsyncSession, test_data):
    created = await BatchCreateClientsUseCase(uow).execute(bulk_payloads(test_data, 8))
    ids = [op.client_id for op in created.value.successful_operations]

    async def cancel_after_three(progress, cancellation_token):
        if progress.completed == 3:
            cancellation_token.cancel()

    result = await BatchTagsUseCase(uow).execute(
        BatchOperationType.add_tags, ids, ["priority"], progress_callback=cancel_after_three
    )

    assert result.value.cancelled is True
    assert result.value.total_processed == 3
    tagged = []
    for client_id in ids:
        stored = await db_session.get(Client, client_id, populate_existing=True)
        tagged.append("priority" in stored.tags)
    assert tagged == [True] * 3 + [False] * 5


@pytest.mark.asyncio
async def test_progress_reported_across_chunks(uow, test_data):
    reports = []

    async def record(progress, cancellation_token):
        reports.append(progress.completed)

    result = await BatchCreateClientsUseCase(uow, BatchRunner(chunk_size=2)).execute(
        bulk_payloads(test_data, 5), progress_callback=record
    )

    batch = result.value
    assert reports == [1, 2, 3, 4, 5]
    assert batch.successful_count == 5
    assert batch.warnings == ["Large batch of 5 items processed in 3 chunks of up to 2"]
