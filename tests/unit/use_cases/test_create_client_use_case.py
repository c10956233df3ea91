"""
Unit tests for CreateClientUseCase

Tests defaults merging, the individual/business union and store failures
with mocked repositories.
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4
from sqlalchemy.exc import IntegrityError
from src.app.use_cases.clients import CreateClientUseCase
from src.domain.entities import ClientStatus, ClientType


def setup_create(mock_uow):
    mock_uow.clients.create = AsyncMock(side_effect=lambda client: client)


@pytest.mark.asyncio
async def test_create_individual_applies_defaults(mock_uow, test_data):
    setup_create(mock_uow)
    actor_id = uuid4()
    payload = test_data.get_copy("minimal_individual_client")
    payload["contact_info"]["email"] = "Paul.Bernard@Acme-Logistics.com"

    result = await CreateClientUseCase(mock_uow).execute(payload, actor_id)

    assert result.is_ok()
    client = result.value
    assert client.client_type == ClientType.individual
    assert client.status == ClientStatus.active
    assert client.display_name == "Paul Bernard"
    assert client.business_info is None
    assert client.created_by == actor_id
    assert client.commercial_info == {
        "credit_limit": 0.0,
        "credit_limit_currency": "EUR",
        "payment_terms_days": 30,
        "payment_terms": "net_30",
        "payment_methods": ["bank_transfer"],
        "preferred_language": "fr",
        "priority": "normal",
        "risk_level": "low",
    }
    assert client.commercial_history == {
        "total_orders_amount": 0,
        "total_orders_count": 0,
        "current_balance": 0,
        "average_payment_delay_days": 0,
    }

    stored = mock_uow.clients.create.await_args[0][0]
    assert stored.email == "paul.bernard@acme-logistics.com"

    audit_event = mock_uow.audit_events.create.await_args[0][0]
    assert audit_event.action == "created"
    assert audit_event.actor_id == actor_id
    assert mock_uow.commit.await_count == 1


@pytest.mark.asyncio
async def test_create_business_keeps_supplied_terms(mock_uow, test_data):
    setup_create(mock_uow)

    result = await CreateClientUseCase(mock_uow).execute(test_data.get_copy("business_client"))

    assert result.is_ok()
    client = result.value
    assert client.individual_info is None
    assert client.business_info["company_name"] == "Transports Martin SARL"
    assert client.commercial_info["credit_limit"] == 50000
    assert client.commercial_info["payment_terms"] == "net_45"
    # Unspecified terms still get their defaults
    assert client.commercial_info["preferred_language"] == "fr"

    stored = mock_uow.clients.create.await_args[0][0]
    assert stored.registration_number == "RCS-PARIS-552100554"


@pytest.mark.asyncio
async def test_create_rejects_both_type_sections(mock_uow, test_data):
    setup_create(mock_uow)
    payload = test_data.get_copy("individual_client")
    payload["business_info"] = {"company_name": "Dupont SAS"}

    result = await CreateClientUseCase(mock_uow).execute(payload)

    assert result.is_err()
    assert result.error.code == "INVALID_CLIENT_DATA"
    mock_uow.clients.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_rejects_unknown_client_type(mock_uow, test_data):
    payload = test_data.get_copy("individual_client")
    payload["client_type"] = "government"

    result = await CreateClientUseCase(mock_uow).execute(payload)

    assert result.is_err()
    assert result.error.code == "INVALID_CLIENT_DATA"
    assert result.error.details["errors"]


@pytest.mark.asyncio
async def test_create_wraps_store_constraint_violation(mock_uow, test_data):
    mock_uow.clients.create = AsyncMock(
        side_effect=IntegrityError(
            "INSERT INTO clients", {}, Exception("UNIQUE constraint failed: clients.email")
        )
    )

    result = await CreateClientUseCase(mock_uow).execute(test_data.get_copy("individual_client"))

    assert result.is_err()
    assert result.error.code == "CREATE_FAILED"
    assert result.error.message == (
        "Failed to create client: UNIQUE constraint failed: clients.email"
    )
    assert mock_uow.rollback.await_count == 1
    mock_uow.commit.assert_not_awaited()
