from fastapi import status

from src.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Use case error code -> HTTP status
ERROR_STATUS_CODES = {
    "VALIDATION_FAILED": 422,
    "INVALID_CLIENT_DATA": 422,
    "INVALID_ENUM_VALUE": 422,
    "CLIENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONTACT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TRANSFER_TARGET_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ACTIVE_FOLDERS": status.HTTP_409_CONFLICT,
    "INVALID_STATUS_TRANSITION": status.HTTP_409_CONFLICT,
    "CREDIT_LIMIT_BELOW_BALANCE": status.HTTP_409_CONFLICT,
    "CLIENT_TYPE_MISMATCH": status.HTTP_409_CONFLICT,
    "LAST_CONTACT": status.HTTP_409_CONFLICT,
    "INVALID_TRANSFER_TARGET": status.HTTP_409_CONFLICT,
    "TRANSFER_TARGET_REQUIRED": status.HTTP_409_CONFLICT,
    "FOLDER_CASCADE_FAILED": status.HTTP_409_CONFLICT,
    "DUPLICATE_VALUE": status.HTTP_409_CONFLICT,
    "CREATE_FAILED": status.HTTP_409_CONFLICT,
    "INVALID_BATCH": status.HTTP_400_BAD_REQUEST,
    "UNSUPPORTED_OPERATION": status.HTTP_400_BAD_REQUEST,
    "BATCH_SIZE_EXCEEDED": status.HTTP_400_BAD_REQUEST,
}


def raise_for_error(error: Error):
    """Raise the API exception matching a use case error"""
    status_code = ERROR_STATUS_CODES.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
