from uuid import uuid4

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.authorization import AuthContext
from src.domain.permissions import PermissionSet

REPOSITORIES = (
    "users",
    "roles",
    "permissions",
    "sessions",
    "audit_logs",
    "documents",
    "document_versions",
)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    # Every repository method is awaitable
    for name in REPOSITORIES:
        setattr(uow, name, AsyncMock())
    return uow


@pytest.fixture
def mock_storage():
    return AsyncMock()


@pytest.fixture
def make_ctx():
    """Build an AuthContext holding the given permission keys."""

    def _make(*keys, user_id=None):
        return AuthContext(
            user_id=user_id or uuid4(),
            email="caller@example.com",
            permissions=PermissionSet.from_keys(keys),
        )

    return _make
