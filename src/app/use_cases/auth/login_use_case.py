"""
Login Use Case

Authenticates a user and issues an access token plus a refresh session.
"""

import logging

from libs.result import Error, Result, Return
from src.app.errors import ACCOUNT_INACTIVE, INVALID_CREDENTIALS
from src.app.services.passwords import verify_dummy_password, verify_password
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import LoginResponse, UserInfo

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password give the same error
    - User must have status=active and not be soft-deleted
    - Creates a new refresh session; no session on any failure
    - Access token embeds the permission snapshot resolved now
    - Updates user.last_login_at
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing tokens and user info, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email.lower())

            # Always perform a hash check even if user not found
            if user is None:
                verify_dummy_password(password)
                logger.warning("Login failed: unknown email")
                return Return.err(
                    Error(INVALID_CREDENTIALS, "Invalid email or password")
                )

            if not verify_password(password, user.password_hash):
                logger.warning("Login failed: wrong password for user %s", user.id)
                return Return.err(
                    Error(INVALID_CREDENTIALS, "Invalid email or password")
                )

            if not user.is_active:
                logger.warning("Login refused for inactive user %s", user.id)
                return Return.err(Error(ACCOUNT_INACTIVE, "Account is not active"))

            tokens = await TokenService(self.uow).issue_tokens(user)

            user.last_login_at = utcnow()
            await self.uow.users.update(user)

            await self.uow.commit()

            logger.info("User %s logged in (session %s)", user.id, tokens.session_id)

            return Return.ok(
                LoginResponse(
                    access_token=tokens.access_token,
                    expires_in=tokens.expires_in,
                    refresh_token=tokens.refresh_token,
                    user=UserInfo.build(user, tokens.role, tokens.permissions.keys()),
                )
            )
