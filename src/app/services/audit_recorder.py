from typing import Any, Dict, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditLogEntry

RESOURCE_DOCUMENT = "document"
RESOURCE_USER = "user"
RESOURCE_ROLE = "role"
RESOURCE_PERMISSION = "permission"


class AuditRecorder:
    """
    Appends audit entries through the caller's unit of work.

    The entry is flushed, not committed: the use case commits it together with
    the mutation it describes, so either both persist or neither does.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record(
        self,
        actor_id: Optional[UUID],
        action: AuditAction,
        resource_type: str,
        resource_id: Any,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuditLogEntry:
        entry = AuditLogEntry(
            user_id=actor_id,
            action=action,
            resource_type=resource_type,
            resource_id=str(resource_id),
            event_metadata=metadata or {},
        )
        return await self.uow.audit_logs.create(entry)
