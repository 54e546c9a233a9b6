"""
Error codes returned by use cases.

The API layer maps each code to an HTTP status (see src/api/error.py).
Codes are grouped by the failure kind they belong to.
"""

from libs.result import Error

# Unauthenticated
UNAUTHENTICATED = "UNAUTHENTICATED"
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
INVALID_SESSION = "INVALID_SESSION"

# Forbidden
MISSING_PERMISSION = "MISSING_PERMISSION"

# Not found
USER_NOT_FOUND = "USER_NOT_FOUND"
ROLE_NOT_FOUND = "ROLE_NOT_FOUND"
PERMISSION_NOT_FOUND = "PERMISSION_NOT_FOUND"
DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
VERSION_NOT_FOUND = "VERSION_NOT_FOUND"

# Conflict
EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
ROLE_ALREADY_EXISTS = "ROLE_ALREADY_EXISTS"
PERMISSION_ALREADY_EXISTS = "PERMISSION_ALREADY_EXISTS"
PERMISSION_ALREADY_ASSIGNED = "PERMISSION_ALREADY_ASSIGNED"
ROLE_IN_USE = "ROLE_IN_USE"
VERSION_CONFLICT = "VERSION_CONFLICT"

# Validation
VALIDATION_FAILED = "VALIDATION_FAILED"
INVALID_PERMISSION_KEY = "INVALID_PERMISSION_KEY"

# Too large
FILE_TOO_LARGE = "FILE_TOO_LARGE"

# Storage
STORAGE_FAILURE = "STORAGE_FAILURE"


def missing_permission(key: str) -> Error:
    return Error(MISSING_PERMISSION, f"Missing permission: {key}")


def invalid_session() -> Error:
    # One message for every refresh failure: callers cannot tell a
    # rotated session from an unknown or expired one
    return Error(INVALID_SESSION, "Invalid or expired session")
