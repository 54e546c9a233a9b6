"""
Change User Status Use Case

Activates, deactivates or suspends a user account.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import USER_NOT_FOUND, VALIDATION_FAILED
from src.app.services.audit_recorder import RESOURCE_USER, AuditRecorder
from src.app.services.authorization import AuthContext, authorize
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditAction, UserStatus
from .dtos import UserResponse

logger = logging.getLogger(__name__)


class ChangeStatusUseCase:
    """
    Use case for changing a user's account status.

    Business Rules:
    - Requires users.suspend
    - Target user must exist and not be soft-deleted
    - Leaving status=active revokes every refresh session of the user, so
      the account is locked out once its access token expires
    - Creates audit entry with old and new status
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: AuthContext, target_user_id: UUID, status: str
    ) -> Result[UserResponse]:
        allowed = authorize(ctx, "users.suspend")
        if allowed.is_err():
            return allowed

        try:
            new_status = UserStatus(status)
        except ValueError:
            return Return.err(
                Error(
                    VALIDATION_FAILED,
                    f"Invalid status: {status}. Must be one of: "
                    + ", ".join(s.value for s in UserStatus),
                )
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(target_user_id)
            if user is None or user.deleted_at is not None:
                return Return.err(Error(USER_NOT_FOUND, "User not found"))

            old_status = user.status
            user.status = new_status
            user.updated_at = utcnow()
            user = await self.uow.users.update(user)

            revoked = 0
            if new_status != UserStatus.active:
                revoked = await self.uow.sessions.revoke_all_by_user_id(user.id)

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.UPDATE,
                RESOURCE_USER,
                user.id,
                {
                    "field": "status",
                    "old_status": old_status.value,
                    "new_status": new_status.value,
                    "revoked_sessions": revoked,
                },
            )

            await self.uow.commit()

            logger.info(
                "User %s status %s -> %s by %s (%d sessions revoked)",
                user.id,
                old_status.value,
                new_status.value,
                ctx.user_id,
                revoked,
            )
            return Return.ok(UserResponse.from_entity(user))
