from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import AuditLogEntry


class IAuditLogRepository(ABC):
    """
    AuditLogEntry repository interface - application layer

    Append-only: there is deliberately no update or delete method.
    """

    @abstractmethod
    async def create(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Append a new audit entry"""
        pass

    @abstractmethod
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

        Returns:
            Tuple of (entries list, next_cursor)
            - entries: ordered by created_at DESC
            - next_cursor: Cursor for next page, None if no more entries
        """
        pass
