"""
Assign / Remove Permission Use Cases

Edit the permission set of a role.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import PERMISSION_ALREADY_ASSIGNED, PERMISSION_NOT_FOUND, ROLE_NOT_FOUND
from src.app.services.audit_recorder import RESOURCE_ROLE, AuditRecorder
from src.app.services.authorization import AuthContext, authorize
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction
from .dtos import RoleResponse

logger = logging.getLogger(__name__)


class AssignPermissionUseCase:
    """
    Use case for granting a permission to a role.

    Business Rules:
    - Requires permissions.manage
    - Role and permission must exist
    - A pair is assigned at most once (PERMISSION_ALREADY_ASSIGNED)
    - Holders see the change from their next login or refresh on
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: AuthContext, role_id: UUID, permission_key: str
    ) -> Result[RoleResponse]:
        allowed = authorize(ctx, "permissions.manage")
        if allowed.is_err():
            return allowed

        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error(ROLE_NOT_FOUND, "Role not found"))

            permission = await self.uow.permissions.get_by_name(permission_key)
            if permission is None:
                return Return.err(
                    Error(PERMISSION_NOT_FOUND, f"Permission '{permission_key}' not found")
                )

            if await self.uow.roles.has_permission(role.id, permission.id):
                return Return.err(
                    Error(
                        PERMISSION_ALREADY_ASSIGNED,
                        f"Permission '{permission_key}' is already assigned to this role",
                    )
                )

            await self.uow.roles.add_permission(role.id, permission.id)

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.UPDATE,
                RESOURCE_ROLE,
                role.id,
                {"name": role.name, "permission_added": permission.name},
            )

            keys = await self.uow.permissions.get_keys_for_role(role.id, active_only=False)

            await self.uow.commit()

            logger.info("Permission %s assigned to role %s by %s", permission.name, role.id, ctx.user_id)
            return Return.ok(RoleResponse.from_entity(role, keys))


class RemovePermissionUseCase:
    """
    Use case for revoking a permission from a role.

    Business Rules:
    - Requires permissions.manage
    - The permission must currently be assigned to the role
    - Issued access tokens keep the permission until they expire
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: AuthContext, role_id: UUID, permission_key: str
    ) -> Result[RoleResponse]:
        allowed = authorize(ctx, "permissions.manage")
        if allowed.is_err():
            return allowed

        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error(ROLE_NOT_FOUND, "Role not found"))

            permission = await self.uow.permissions.get_by_name(permission_key)
            if permission is None:
                return Return.err(
                    Error(PERMISSION_NOT_FOUND, f"Permission '{permission_key}' not found")
                )

            removed = await self.uow.roles.remove_permission(role.id, permission.id)
            if not removed:
                return Return.err(
                    Error(
                        PERMISSION_NOT_FOUND,
                        f"Permission '{permission_key}' is not assigned to this role",
                    )
                )

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.UPDATE,
                RESOURCE_ROLE,
                role.id,
                {"name": role.name, "permission_removed": permission.name},
            )

            keys = await self.uow.permissions.get_keys_for_role(role.id, active_only=False)

            await self.uow.commit()

            logger.info("Permission %s removed from role %s by %s", permission.name, role.id, ctx.user_id)
            return Return.ok(RoleResponse.from_entity(role, keys))
