from fastapi import status
from libs.result import Error
from src.app import errors

# Error code -> HTTP status. Codes not listed are server errors.
STATUS_BY_CODE = {
    errors.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    errors.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    errors.ACCOUNT_INACTIVE: status.HTTP_401_UNAUTHORIZED,
    errors.INVALID_SESSION: status.HTTP_401_UNAUTHORIZED,
    errors.MISSING_PERMISSION: status.HTTP_403_FORBIDDEN,
    errors.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.ROLE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.PERMISSION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.DOCUMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.VERSION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    errors.ROLE_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    errors.PERMISSION_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    errors.PERMISSION_ALREADY_ASSIGNED: status.HTTP_409_CONFLICT,
    errors.ROLE_IN_USE: status.HTTP_409_CONFLICT,
    errors.VERSION_CONFLICT: status.HTTP_409_CONFLICT,
    errors.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    errors.INVALID_PERMISSION_KEY: status.HTTP_400_BAD_REQUEST,
    errors.FILE_TOO_LARGE: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def to_http_error(error: Error) -> Exception:
    """Turn a use case error into the exception the API raises for it."""
    status_code = STATUS_BY_CODE.get(error.code)
    if status_code is None:
        return ServerError(error)
    return ClientError(error, status_code=status_code)
