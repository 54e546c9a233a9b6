import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_log_repository import IAuditLogRepository
from src.domain.entities import AuditLogEntry


class AuditLogRepository(IAuditLogRepository):
    """AuditLogEntry repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Append a new audit entry (immutable)"""
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def search(
        self,
        user_id: Optional[UUID] = None,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[AuditLogEntry], Optional[str]]:
        """
        Query audit entries with cursor-based pagination.

        Cursor format: base64 of "<created_at ISO>|<id>" of the last entry.
        The id breaks ties between entries written in the same instant.
        """
        stmt = select(AuditLogEntry)

        if user_id is not None:
            stmt = stmt.where(AuditLogEntry.user_id == user_id)
        if resource_type is not None:
            stmt = stmt.where(AuditLogEntry.resource_type == resource_type)
        if resource_id is not None:
            stmt = stmt.where(AuditLogEntry.resource_id == resource_id)
        if since is not None:
            stmt = stmt.where(AuditLogEntry.created_at >= since)
        if until is not None:
            stmt = stmt.where(AuditLogEntry.created_at <= until)

        if cursor:
            try:
                timestamp_str, _, id_str = base64.b64decode(cursor).decode("utf-8").partition("|")
                cursor_timestamp = datetime.fromisoformat(timestamp_str)
                cursor_id = UUID(id_str)
                stmt = stmt.where(
                    or_(
                        AuditLogEntry.created_at < cursor_timestamp,
                        and_(
                            AuditLogEntry.created_at == cursor_timestamp,
                            AuditLogEntry.id < cursor_id,
                        ),
                    )
                )
            except (ValueError, TypeError):
                # Invalid cursor, ignore and return from beginning
                pass

        stmt = stmt.order_by(AuditLogEntry.created_at.desc(), AuditLogEntry.id.desc())
        stmt = stmt.limit(limit + 1)

        result = await self.session.exec(stmt)
        entries = list(result.all())

        has_more = len(entries) > limit
        if has_more:
            entries = entries[:limit]

        next_cursor = None
        if has_more and entries:
            last = entries[-1]
            cursor_str = f"{last.created_at.isoformat()}|{last.id}"
            next_cursor = base64.b64encode(cursor_str.encode("utf-8")).decode("utf-8")

        return entries, next_cursor
