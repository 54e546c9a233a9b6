"""
Update Role Use Case

Activates or deactivates a role and edits its descriptive fields.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import ROLE_NOT_FOUND
from src.app.services.audit_recorder import RESOURCE_ROLE, AuditRecorder
from src.app.services.authorization import AuthContext, authorize
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditAction
from .dtos import RoleResponse, UpdateRoleCommand

logger = logging.getLogger(__name__)


class UpdateRoleUseCase:
    """
    Use case for updating a role.

    Business Rules:
    - Requires roles.edit
    - The name cannot change
    - A deactivated role grants nothing from the holder's next login or
      refresh on; issued access tokens keep their snapshot
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: AuthContext, role_id: UUID, command: UpdateRoleCommand
    ) -> Result[RoleResponse]:
        allowed = authorize(ctx, "roles.edit")
        if allowed.is_err():
            return allowed

        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error(ROLE_NOT_FOUND, "Role not found"))

            changes = command.model_dump(exclude_unset=True)
            for field, value in changes.items():
                setattr(role, field, value)
            role.updated_at = utcnow()
            role = await self.uow.roles.update(role)

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.UPDATE,
                RESOURCE_ROLE,
                role.id,
                {"name": role.name, "changes": changes},
            )

            keys = await self.uow.permissions.get_keys_for_role(role.id, active_only=False)

            await self.uow.commit()

            logger.info("Role %s updated by %s: %s", role.id, ctx.user_id, sorted(changes))
            return Return.ok(RoleResponse.from_entity(role, keys))
