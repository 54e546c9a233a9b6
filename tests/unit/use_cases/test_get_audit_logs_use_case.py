from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from src.app.use_cases.audit import AuditLogQuery, GetAuditLogsUseCase
from src.domain.entities import AuditAction, AuditLogEntry, User


@pytest.mark.asyncio
async def test_returns_entries_with_actor_email(mock_uow, make_ctx):
    # Arrange
    actor = User(email="alice@example.com", password_hash="x")
    entries = [
        AuditLogEntry(
            user_id=actor.id,
            action=AuditAction.ACCESS,
            resource_type="document",
            resource_id=str(uuid4()),
            event_metadata={"version": 1},
        ),
        AuditLogEntry(
            user_id=None,
            action=AuditAction.CREATE,
            resource_type="role",
            resource_id=str(uuid4()),
        ),
    ]
    mock_uow.audit_logs.search.return_value = (entries, "next-page")
    mock_uow.users.get_by_ids.return_value = [actor]

    # Act
    result = await GetAuditLogsUseCase(mock_uow).execute(make_ctx("audit.view"), AuditLogQuery())

    # Assert
    assert result.is_ok()
    page = result.value
    assert page.next_cursor == "next-page"
    assert page.logs[0].user_email == "alice@example.com"
    assert page.logs[0].action == "ACCESS"
    assert page.logs[0].metadata == {"version": 1}
    assert page.logs[0].timestamp.endswith("Z")
    assert page.logs[1].user_id is None
    assert page.logs[1].user_email is None
    assert page.logs[1].metadata == {}
    mock_uow.users.get_by_ids.assert_called_once_with([actor.id])
    mock_uow.audit_logs.create.assert_not_called()


@pytest.mark.asyncio
async def test_filters_are_passed_through(mock_uow, make_ctx):
    mock_uow.audit_logs.search.return_value = ([], None)
    mock_uow.users.get_by_ids.return_value = []
    user_id = uuid4()
    since = datetime(2026, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    query = AuditLogQuery(
        user_id=user_id,
        resource_type="document",
        resource_id="abc",
        since=since,
        limit=10,
        cursor="c1",
    )

    await GetAuditLogsUseCase(mock_uow).execute(make_ctx("*"), query)

    mock_uow.audit_logs.search.assert_called_once_with(
        user_id=user_id,
        resource_type="document",
        resource_id="abc",
        since=datetime(2026, 1, 1, 10, 0),
        until=None,
        limit=10,
        cursor="c1",
    )


@pytest.mark.asyncio
async def test_resource_id_requires_resource_type(mock_uow, make_ctx):
    result = await GetAuditLogsUseCase(mock_uow).execute(
        make_ctx("audit.view"), AuditLogQuery(resource_id="abc")
    )

    assert result.error.code == "VALIDATION_FAILED"
    mock_uow.audit_logs.search.assert_not_called()


@pytest.mark.asyncio
async def test_since_after_until(mock_uow, make_ctx):
    query = AuditLogQuery(since=datetime(2026, 2, 1), until=datetime(2026, 1, 1))

    result = await GetAuditLogsUseCase(mock_uow).execute(make_ctx("audit.view"), query)

    assert result.error.code == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_denied_without_audit_view(mock_uow, make_ctx):
    result = await GetAuditLogsUseCase(mock_uow).execute(make_ctx("users.*"), AuditLogQuery())

    assert result.error.message == "Missing permission: audit.view"
    mock_uow.audit_logs.search.assert_not_called()


def test_limit_is_bounded():
    with pytest.raises(ValidationError):
        AuditLogQuery(limit=0)
    with pytest.raises(ValidationError):
        AuditLogQuery(limit=201)
