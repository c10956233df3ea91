"""
Unit tests for the use case error -> HTTP status mapping
"""

import warnings

import pytest

from src.api.error import ClientError, ServerError, raise_for_error
from src.libs.result import Error


@pytest.mark.parametrize(
    "code,status_code",
    [
        ("VALIDATION_FAILED", 422),
        ("INVALID_ENUM_VALUE", 422),
        ("CLIENT_NOT_FOUND", 404),
        ("ACTIVE_FOLDERS", 409),
        ("BATCH_SIZE_EXCEEDED", 400),
    ],
)
def test_known_codes_raise_client_error(code, status_code):
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        with pytest.raises(ClientError) as exc_info:
            raise_for_error(Error(code, "boom"))

    assert exc_info.value.status_code == status_code
    assert exc_info.value.base_error.code == code


def test_unknown_code_is_a_server_error():
    with pytest.raises(ServerError):
        raise_for_error(Error("SOMETHING_ELSE", "boom"))
