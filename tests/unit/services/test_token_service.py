from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.services.token_service import (
    TokenService,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
)
from src.domain.base import utcnow
from src.domain.entities import Role, Session, User, UserStatus


@pytest.fixture
def role():
    return Role(name="employee", display_name="Employee")


@pytest.fixture
def user(role):
    return User(
        email="alice@example.com",
        password_hash="x",
        role_id=role.id,
        status=UserStatus.active,
    )


@pytest.fixture
def uow(mock_uow, user, role):
    mock_uow.users.get_by_id.return_value = user
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.permissions.get_keys_for_role.return_value = ["documents.view", "documents.edit"]
    mock_uow.sessions.rotate.return_value = True
    return mock_uow


def make_session(user, generation=0, **kwargs):
    return Session(
        user_id=user.id,
        generation=generation,
        expires_at=utcnow() + timedelta(days=1),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_issue_tokens_creates_session_and_embeds_snapshot(uow, user, role):
    # Act
    tokens = await TokenService(uow).issue_tokens(user)

    # Assert
    uow.sessions.create.assert_called_once()
    session = uow.sessions.create.call_args.args[0]
    assert session.user_id == user.id
    assert session.generation == 0
    assert tokens.session_id == session.id

    access = decode_access_token(tokens.access_token)
    assert access.user_id == user.id
    assert access.email == "alice@example.com"
    assert access.permissions == ["documents.edit", "documents.view"]
    assert access.role_id == role.id
    assert access.role_name == "employee"

    refresh = decode_refresh_token(tokens.refresh_token)
    assert refresh.user_id == user.id
    assert refresh.session_id == session.id
    assert refresh.generation == 0


@pytest.mark.asyncio
async def test_refresh_token_is_not_an_access_token(uow, user):
    tokens = await TokenService(uow).issue_tokens(user)

    assert decode_access_token(tokens.refresh_token) is None
    assert decode_refresh_token("not-a-jwt") is None


@pytest.mark.asyncio
async def test_refresh_rotates_generation(uow, user):
    # Arrange
    session = make_session(user, generation=3)
    uow.sessions.get_by_id.return_value = session
    token = create_refresh_token(user.id, session.id, 3)

    # Act
    result = await TokenService(uow).refresh(token)

    # Assert
    assert result.is_ok()
    uow.sessions.rotate.assert_called_once()
    assert uow.sessions.rotate.call_args.kwargs["expected_generation"] == 3
    assert decode_refresh_token(result.value.refresh_token).generation == 4
    assert result.value.session_id == session.id


@pytest.mark.asyncio
async def test_refresh_re_resolves_permissions(uow, user):
    session = make_session(user)
    uow.sessions.get_by_id.return_value = session
    uow.permissions.get_keys_for_role.return_value = ["documents.*"]

    result = await TokenService(uow).refresh(create_refresh_token(user.id, session.id, 0))

    assert result.is_ok()
    assert decode_access_token(result.value.access_token).permissions == ["documents.*"]


@pytest.mark.asyncio
async def test_refresh_with_previous_generation_fails(uow, user):
    """A token whose generation was already exchanged is dead."""
    session = make_session(user, generation=1)
    uow.sessions.get_by_id.return_value = session

    result = await TokenService(uow).refresh(create_refresh_token(user.id, session.id, 0))

    assert result.is_err()
    assert result.error.code == "INVALID_SESSION"
    uow.sessions.rotate.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_losing_rotation_race_fails(uow, user):
    session = make_session(user)
    uow.sessions.get_by_id.return_value = session
    uow.sessions.rotate.return_value = False

    result = await TokenService(uow).refresh(create_refresh_token(user.id, session.id, 0))

    assert result.is_err()
    assert result.error.code == "INVALID_SESSION"


@pytest.mark.asyncio
async def test_refresh_revoked_session_fails(uow, user):
    session = make_session(user, revoked=True)
    uow.sessions.get_by_id.return_value = session

    result = await TokenService(uow).refresh(create_refresh_token(user.id, session.id, 0))

    assert result.error.code == "INVALID_SESSION"


@pytest.mark.asyncio
async def test_refresh_expired_session_fails(uow, user):
    session = make_session(user)
    session.expires_at = utcnow() - timedelta(seconds=1)
    uow.sessions.get_by_id.return_value = session

    result = await TokenService(uow).refresh(create_refresh_token(user.id, session.id, 0))

    assert result.error.code == "INVALID_SESSION"


@pytest.mark.asyncio
async def test_refresh_session_of_other_user_fails(uow, user):
    session = make_session(user)
    uow.sessions.get_by_id.return_value = session

    result = await TokenService(uow).refresh(create_refresh_token(uuid4(), session.id, 0))

    assert result.error.code == "INVALID_SESSION"


@pytest.mark.asyncio
async def test_refresh_for_suspended_user_fails(uow, user):
    session = make_session(user)
    uow.sessions.get_by_id.return_value = session
    user.status = UserStatus.suspended

    result = await TokenService(uow).refresh(create_refresh_token(user.id, session.id, 0))

    assert result.is_err()
    assert result.error.message == "Invalid or expired session"
    uow.sessions.rotate.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_with_garbage_token_fails(uow):
    result = await TokenService(uow).refresh("garbage")

    assert result.error.code == "INVALID_SESSION"
    uow.sessions.get_by_id.assert_not_called()
