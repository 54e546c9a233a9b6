"""
Load Context Use Case

Loads the current user's profile for the permission snapshot in their token.
"""

from libs.result import Error, Result, Return
from src.app.errors import UNAUTHENTICATED
from src.app.services.authorization import AuthContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import MeResponse, RoleInfo, UserInfo


class LoadContextUseCase:
    """
    Use case for loading current user context.

    Business Rules:
    - Permissions and role come from the access token, not the database:
      the response shows exactly what the caller is authorized for right now
    - Profile fields are loaded from the store
    - A user deleted after the token was issued is no longer authenticated
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: AuthContext) -> Result[MeResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(ctx.user_id)
            if user is None or user.deleted_at is not None:
                return Return.err(Error(UNAUTHENTICATED, "User no longer exists"))

            info = UserInfo.build(user, None, ctx.permissions.keys())
            if ctx.role_id is not None:
                info.role = RoleInfo(id=str(ctx.role_id), name=ctx.role_name or "")

            return Return.ok(MeResponse(user=info))
