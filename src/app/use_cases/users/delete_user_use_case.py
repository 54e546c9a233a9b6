"""
Delete User Use Case

Soft-deletes a user account and ends its sessions.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import USER_NOT_FOUND
from src.app.services.audit_recorder import RESOURCE_USER, AuditRecorder
from src.app.services.authorization import AuthContext, authorize
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditAction
from .dtos import DeleteUserResponse

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """
    Use case for deleting a user.

    Business Rules:
    - Requires users.delete
    - Users are never hard-deleted: deleted_at is set instead
    - All refresh sessions of the user are revoked
    - Deleting an already deleted user is USER_NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: AuthContext, target_user_id: UUID) -> Result[DeleteUserResponse]:
        allowed = authorize(ctx, "users.delete")
        if allowed.is_err():
            return allowed

        async with self.uow:
            user = await self.uow.users.get_by_id(target_user_id)
            if user is None or user.deleted_at is not None:
                return Return.err(Error(USER_NOT_FOUND, "User not found"))

            now = utcnow()
            user.deleted_at = now
            user.updated_at = now
            await self.uow.users.update(user)

            revoked = await self.uow.sessions.revoke_all_by_user_id(user.id)

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.DELETE,
                RESOURCE_USER,
                user.id,
                {"email": user.email, "revoked_sessions": revoked},
            )

            await self.uow.commit()

            logger.info("User %s deleted by %s", user.id, ctx.user_id)
            return Return.ok(DeleteUserResponse(id=str(user.id), revoked_sessions=revoked))
