"""
Create Role Use Case
"""

import logging

from libs.result import Error, Result, Return
from src.app.errors import ROLE_ALREADY_EXISTS
from src.app.services.audit_recorder import RESOURCE_ROLE, AuditRecorder
from src.app.services.authorization import AuthContext, authorize
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, Role
from .dtos import CreateRoleCommand, RoleResponse

logger = logging.getLogger(__name__)


class CreateRoleUseCase:
    """
    Use case for creating a role.

    Business Rules:
    - Requires roles.create
    - Role name must be unique
    - New roles start active and without permissions
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: AuthContext, command: CreateRoleCommand) -> Result[RoleResponse]:
        allowed = authorize(ctx, "roles.create")
        if allowed.is_err():
            return allowed

        async with self.uow:
            if await self.uow.roles.get_by_name(command.name) is not None:
                return Return.err(
                    Error(ROLE_ALREADY_EXISTS, f"Role '{command.name}' already exists")
                )

            role = await self.uow.roles.create(
                Role(
                    name=command.name,
                    display_name=command.display_name,
                    description=command.description,
                )
            )

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.CREATE,
                RESOURCE_ROLE,
                role.id,
                {"name": role.name},
            )

            await self.uow.commit()

            logger.info("Role %s (%s) created by %s", role.id, role.name, ctx.user_id)
            return Return.ok(RoleResponse.from_entity(role, []))
