import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.fixtures.json_loader import TestDataLoader


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.clients.find_by_email = AsyncMock(return_value=[])
    uow.clients.find_by_registration_number = AsyncMock(return_value=[])
    uow.clients.get_by_ids = AsyncMock(return_value=[])
    uow.folders.count_active_by_client_ids = AsyncMock(return_value={})
    uow.audit_events.create = AsyncMock()
    uow.audit_events.get_by_client_id = AsyncMock(return_value=[])
    return uow


@pytest.fixture
def test_data():
    return TestDataLoader()
