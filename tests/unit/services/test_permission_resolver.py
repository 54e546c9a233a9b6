from uuid import uuid4

import pytest

from src.app.services.permission_resolver import PermissionResolver
from src.domain.entities import User


def make_user(role_id=None):
    return User(email="user@example.com", password_hash="x", role_id=role_id)


@pytest.mark.asyncio
async def test_user_without_role_has_no_permissions(mock_uow):
    permissions = await PermissionResolver(mock_uow).resolve(make_user())

    assert len(permissions) == 0
    mock_uow.permissions.get_keys_for_role.assert_not_called()


@pytest.mark.asyncio
async def test_resolves_active_keys_of_role(mock_uow):
    role_id = uuid4()
    mock_uow.permissions.get_keys_for_role.return_value = ["documents.view", "users.*"]

    permissions = await PermissionResolver(mock_uow).resolve(make_user(role_id))

    assert permissions.keys() == ["documents.view", "users.*"]
    assert permissions.allows("users.delete")
    mock_uow.permissions.get_keys_for_role.assert_called_once_with(role_id, active_only=True)


@pytest.mark.asyncio
async def test_malformed_stored_key_is_ignored(mock_uow):
    mock_uow.permissions.get_keys_for_role.return_value = ["documents.view", "broken"]

    permissions = await PermissionResolver(mock_uow).resolve(make_user(uuid4()))

    assert permissions.keys() == ["documents.view"]
