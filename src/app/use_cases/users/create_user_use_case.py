"""
Create User Use Case

Admin action: creates a user account with an optional role.
"""

import logging

from libs.result import Error, Result, Return
from src.app.errors import EMAIL_ALREADY_EXISTS, ROLE_NOT_FOUND
from src.app.services.audit_recorder import RESOURCE_USER, AuditRecorder
from src.app.services.authorization import AuthContext, authorize
from src.app.services.passwords import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, User
from .dtos import CreateUserCommand, UserResponse

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Use case for creating a user.

    Business Rules:
    - Requires users.create
    - Email must be unique, soft-deleted accounts included
    - Role, when given, must exist
    - Password stored as bcrypt hash, never echoed or audited
    - One CREATE audit entry, committed with the user row
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: AuthContext, command: CreateUserCommand) -> Result[UserResponse]:
        allowed = authorize(ctx, "users.create")
        if allowed.is_err():
            return allowed

        async with self.uow:
            email = command.email.lower()

            existing = await self.uow.users.get_by_email(email, include_deleted=True)
            if existing is not None:
                return Return.err(
                    Error(EMAIL_ALREADY_EXISTS, "A user with this email already exists")
                )

            if command.role_id is not None:
                role = await self.uow.roles.get_by_id(command.role_id)
                if role is None:
                    return Return.err(Error(ROLE_NOT_FOUND, "Role not found"))

            user = User(
                email=email,
                password_hash=hash_password(command.password),
                first_name=command.first_name,
                last_name=command.last_name,
                role_id=command.role_id,
                status=command.status,
            )
            user = await self.uow.users.create(user)

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.CREATE,
                RESOURCE_USER,
                user.id,
                {
                    "email": user.email,
                    "role_id": str(user.role_id) if user.role_id else None,
                    "status": user.status.value,
                },
            )

            await self.uow.commit()

            logger.info("User %s created by %s", user.id, ctx.user_id)
            return Return.ok(UserResponse.from_entity(user))
