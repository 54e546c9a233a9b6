"""
Permission Catalog Use Cases

List, create and (de)activate permission keys. Keys are append-only: there is
no rename or delete path, since issued access tokens carry them verbatim.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.errors import INVALID_PERMISSION_KEY, PERMISSION_ALREADY_EXISTS, PERMISSION_NOT_FOUND
from src.app.services.audit_recorder import RESOURCE_PERMISSION, AuditRecorder
from src.app.services.authorization import AuthContext, authorize
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditAction, Permission
from src.domain.permissions import GrantScope, InvalidPermissionKey, PermissionGrant
from .dtos import (
    CreatePermissionCommand,
    PermissionListResponse,
    PermissionResponse,
    UpdatePermissionCommand,
)

logger = logging.getLogger(__name__)

GLOBAL_MODULE = "system"


class ListPermissionsUseCase:
    """Requires permissions.view. Optionally filtered by module."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: AuthContext, module: Optional[str] = None
    ) -> Result[PermissionListResponse]:
        allowed = authorize(ctx, "permissions.view")
        if allowed.is_err():
            return allowed

        async with self.uow:
            permissions = await self.uow.permissions.list_all(module)
            return Return.ok(
                PermissionListResponse(
                    permissions=[PermissionResponse.from_entity(p) for p in permissions]
                )
            )


class CreatePermissionUseCase:
    """
    Use case for adding a permission key to the catalog.

    Business Rules:
    - Requires permissions.manage
    - Key must parse as "*", "<resource>.*" or "<resource>.<action>"
    - Key must be unique
    - Module defaults to the key's resource segment
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: AuthContext, command: CreatePermissionCommand
    ) -> Result[PermissionResponse]:
        allowed = authorize(ctx, "permissions.manage")
        if allowed.is_err():
            return allowed

        try:
            grant = PermissionGrant.parse(command.key)
        except InvalidPermissionKey as e:
            return Return.err(Error(INVALID_PERMISSION_KEY, str(e)))

        module = command.module
        if not module:
            module = GLOBAL_MODULE if grant.scope is GrantScope.all else grant.resource

        async with self.uow:
            if await self.uow.permissions.get_by_name(grant.key) is not None:
                return Return.err(
                    Error(PERMISSION_ALREADY_EXISTS, f"Permission '{grant.key}' already exists")
                )

            permission = await self.uow.permissions.create(
                Permission(
                    name=grant.key,
                    display_name=command.display_name,
                    description=command.description,
                    module=module,
                )
            )

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.CREATE,
                RESOURCE_PERMISSION,
                permission.id,
                {"key": permission.name, "module": permission.module},
            )

            await self.uow.commit()

            logger.info("Permission %s created by %s", permission.name, ctx.user_id)
            return Return.ok(PermissionResponse.from_entity(permission))


class UpdatePermissionUseCase:
    """
    Use case for activating or deactivating a permission key.

    Business Rules:
    - Requires permissions.manage
    - Only is_active can change
    - An inactive key is dropped from every role at the next resolution
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: AuthContext, key: str, command: UpdatePermissionCommand
    ) -> Result[PermissionResponse]:
        allowed = authorize(ctx, "permissions.manage")
        if allowed.is_err():
            return allowed

        async with self.uow:
            permission = await self.uow.permissions.get_by_name(key)
            if permission is None:
                return Return.err(Error(PERMISSION_NOT_FOUND, f"Permission '{key}' not found"))

            was_active = permission.is_active
            permission.is_active = command.is_active
            permission.updated_at = utcnow()
            permission = await self.uow.permissions.update(permission)

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.UPDATE,
                RESOURCE_PERMISSION,
                permission.id,
                {
                    "key": permission.name,
                    "old_is_active": was_active,
                    "new_is_active": permission.is_active,
                },
            )

            await self.uow.commit()

            logger.info(
                "Permission %s %s by %s",
                permission.name,
                "activated" if permission.is_active else "deactivated",
                ctx.user_id,
            )
            return Return.ok(PermissionResponse.from_entity(permission))
