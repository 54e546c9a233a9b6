"""
Audit API Routes

Handles audit log retrieval endpoints.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.error import to_http_error
from src.app.services.authorization import AuthContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import AuditLogPage, AuditLogQuery, GetAuditLogsUseCase
from src.app.use_cases.audit.get_audit_logs_use_case import MAX_LIMIT
from src.depends import get_auth_context, get_unit_of_work

router = APIRouter(prefix="/audit", tags=["Audit"])


@router.get("/logs", status_code=status.HTTP_200_OK, response_model=AuditLogPage)
async def get_audit_logs(
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    user_id: Optional[UUID] = Query(None, alias="userId", description="Actor"),
    resource_type: Optional[str] = Query(None, alias="resourceType"),
    resource_id: Optional[str] = Query(None, alias="resourceId"),
    since: Optional[datetime] = Query(None, description="Inclusive lower bound"),
    until: Optional[datetime] = Query(None, description="Inclusive upper bound"),
    limit: int = Query(50, ge=1, le=MAX_LIMIT, description="Maximum number of entries"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    Get Audit Logs

    Query Parameters:
        - userId: Only entries by this actor
        - resourceType / resourceId: Only entries about this resource
        - since / until: Time range (ISO 8601)
        - limit: Page size (1-200, default 50)
        - cursor: Pagination cursor for fetching next page

    Returns:
        - logs: Entries ordered by newest first
        - nextCursor: Cursor for next page (null if no more entries)

    Raises:
        - 400 Bad Request: resourceId without resourceType, or since > until
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: Missing audit.view
    """
    query = AuditLogQuery(
        user_id=user_id,
        resource_type=resource_type,
        resource_id=resource_id,
        since=since,
        until=until,
        limit=limit,
        cursor=cursor,
    )

    use_case = GetAuditLogsUseCase(uow)
    result = await use_case.execute(ctx, query)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
