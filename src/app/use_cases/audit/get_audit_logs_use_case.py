"""
Get Audit Logs Use Case

Retrieves audit entries with filters and pagination.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import Field

from libs.result import Error, Result, Return
from src.app.errors import VALIDATION_FAILED
from src.app.services.authorization import AuthContext, authorize
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.base_dto import ApiModel

MAX_LIMIT = 200


class AuditLogQuery(ApiModel):
    user_id: Optional[UUID] = None
    resource_type: Optional[str] = None
    resource_id: Optional[str] = None
    since: Optional[datetime] = None
    until: Optional[datetime] = None
    limit: int = Field(default=50, ge=1, le=MAX_LIMIT)
    cursor: Optional[str] = None


class AuditLogItem(ApiModel):
    id: str
    action: str
    user_id: Optional[str]
    user_email: Optional[str]
    resource_type: str
    resource_id: str
    metadata: Dict[str, Any]
    timestamp: str


class AuditLogPage(ApiModel):
    logs: List[AuditLogItem]
    next_cursor: Optional[str] = None


class GetAuditLogsUseCase:
    """
    Use case for querying the audit trail.

    Business Rules:
    - Requires audit.view
    - Filter by actor, by resource_type (+ resource_id) and by time range
    - resource_id only makes sense together with resource_type
    - Results ordered by newest first, cursor-paginated
    - Each entry includes the actor's email when the actor still exists
    - Reading the audit trail is not itself audited
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: AuthContext, query: AuditLogQuery) -> Result[AuditLogPage]:
        """
        Execute get audit logs use case.

        Args:
            ctx: Caller's auth context
            query: Filters, page size and cursor

        Returns:
            Result with logs list and next_cursor, or Error
        """
        allowed = authorize(ctx, "audit.view")
        if allowed.is_err():
            return allowed

        if query.resource_id is not None and query.resource_type is None:
            return Return.err(
                Error(VALIDATION_FAILED, "resource_id requires resource_type")
            )
        since, until = _naive_utc(query.since), _naive_utc(query.until)
        if since and until and since > until:
            return Return.err(Error(VALIDATION_FAILED, "since must not be after until"))

        async with self.uow:
            entries, next_cursor = await self.uow.audit_logs.search(
                user_id=query.user_id,
                resource_type=query.resource_type,
                resource_id=query.resource_id,
                since=since,
                until=until,
                limit=query.limit,
                cursor=query.cursor,
            )

            # Resolve actor emails in one query
            actor_ids = list({e.user_id for e in entries if e.user_id})
            actors = await self.uow.users.get_by_ids(actor_ids)
            emails = {u.id: u.email for u in actors}

            logs = [
                AuditLogItem(
                    id=str(entry.id),
                    action=entry.action.value,
                    user_id=str(entry.user_id) if entry.user_id else None,
                    user_email=emails.get(entry.user_id),
                    resource_type=entry.resource_type,
                    resource_id=entry.resource_id,
                    metadata=entry.event_metadata or {},
                    timestamp=entry.created_at.isoformat() + "Z",
                )
                for entry in entries
            ]

            return Return.ok(AuditLogPage(logs=logs, next_cursor=next_cursor))


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Timestamps are stored as naive UTC
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
