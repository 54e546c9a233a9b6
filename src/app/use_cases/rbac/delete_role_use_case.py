"""
Delete Role Use Case
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import ROLE_IN_USE, ROLE_NOT_FOUND
from src.app.services.audit_recorder import RESOURCE_ROLE, AuditRecorder
from src.app.services.authorization import AuthContext, authorize
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction
from .dtos import DeleteRoleResponse

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """
    Use case for hard-deleting a role.

    Business Rules:
    - Requires roles.delete
    - A role held by any active user cannot be deleted (ROLE_IN_USE);
      deactivate it instead
    - Inactive or deleted users still pointing at the role are detached
    - Permission assignments of the role are removed with it
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: AuthContext, role_id: UUID) -> Result[DeleteRoleResponse]:
        allowed = authorize(ctx, "roles.delete")
        if allowed.is_err():
            return allowed

        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error(ROLE_NOT_FOUND, "Role not found"))

            holders = await self.uow.users.count_active_by_role(role.id)
            if holders > 0:
                return Return.err(
                    Error(
                        ROLE_IN_USE,
                        f"Role is assigned to {holders} active user(s); deactivate it instead",
                    )
                )

            name = role.name
            detached = await self.uow.users.clear_role(role.id)
            await self.uow.roles.delete(role)

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.DELETE,
                RESOURCE_ROLE,
                role_id,
                {"name": name, "detached_users": detached},
            )

            await self.uow.commit()

            logger.info("Role %s (%s) deleted by %s", role_id, name, ctx.user_id)
            return Return.ok(DeleteRoleResponse(id=str(role_id), detached_users=detached))
