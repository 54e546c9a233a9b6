"""
List Roles Use Case
"""

from libs.result import Result, Return
from src.app.services.authorization import AuthContext, authorize
from src.app.services.unit_of_work import UnitOfWork
from .dtos import RoleListResponse, RoleResponse


class ListRolesUseCase:
    """
    Use case for listing roles with their assigned permission keys.

    Business Rules:
    - Requires roles.view
    - Inactive roles and inactive permissions are listed too, flagged
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: AuthContext) -> Result[RoleListResponse]:
        allowed = authorize(ctx, "roles.view")
        if allowed.is_err():
            return allowed

        async with self.uow:
            roles = await self.uow.roles.list_all()

            items = []
            for role in roles:
                keys = await self.uow.permissions.get_keys_for_role(role.id, active_only=False)
                items.append(RoleResponse.from_entity(role, keys))

            return Return.ok(RoleListResponse(roles=items))
