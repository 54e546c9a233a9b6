"""
Change User Role Use Case

Handles reassigning a user's role.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import ROLE_NOT_FOUND, USER_NOT_FOUND
from src.app.services.audit_recorder import RESOURCE_USER, AuditRecorder
from src.app.services.authorization import AuthContext, authorize
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditAction
from .dtos import UserResponse

logger = logging.getLogger(__name__)


class ChangeRoleUseCase:
    """
    Use case for changing a user's role.

    Business Rules:
    - Requires users.manage_roles
    - Target user must exist and not be soft-deleted
    - New role must exist; None detaches the role
    - Creates audit entry with old and new role
    - User's existing access token keeps its permission snapshot until
      it expires or is refreshed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: AuthContext, target_user_id: UUID, role_id: Optional[UUID]
    ) -> Result[UserResponse]:
        """
        Execute change role use case.

        Args:
            ctx: Caller's auth context
            target_user_id: User whose role is being changed
            role_id: Role to assign, or None to remove the role

        Returns:
            Result with the updated user, or Error
        """
        allowed = authorize(ctx, "users.manage_roles")
        if allowed.is_err():
            return allowed

        async with self.uow:
            user = await self.uow.users.get_by_id(target_user_id)
            if user is None or user.deleted_at is not None:
                return Return.err(Error(USER_NOT_FOUND, "User not found"))

            if role_id is not None:
                role = await self.uow.roles.get_by_id(role_id)
                if role is None:
                    return Return.err(Error(ROLE_NOT_FOUND, "Role not found"))

            # Store old role for audit
            old_role_id = user.role_id

            user.role_id = role_id
            user.updated_at = utcnow()
            user = await self.uow.users.update(user)

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.UPDATE,
                RESOURCE_USER,
                user.id,
                {
                    "field": "role",
                    "old_role_id": str(old_role_id) if old_role_id else None,
                    "new_role_id": str(role_id) if role_id else None,
                },
            )

            await self.uow.commit()

            logger.info("Role of user %s changed by %s", user.id, ctx.user_id)
            return Return.ok(UserResponse.from_entity(user))
