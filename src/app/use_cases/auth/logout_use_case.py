"""
Logout Use Case

Revokes the refresh session named by a refresh token.
"""

import logging
from typing import Optional

from libs.result import Result, Return
from src.app.services.token_service import TokenService, decode_refresh_token
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging out.

    Business Rules:
    - Always succeeds, even without a token or with an invalid one
    - A valid refresh token revokes its session; later refreshes fail
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: Optional[str]) -> Result[LogoutResponse]:
        claims = decode_refresh_token(refresh_token) if refresh_token else None

        if claims is not None:
            async with self.uow:
                session = await self.uow.sessions.get_by_id(claims.session_id)
                if session is not None and session.user_id == claims.user_id:
                    if await TokenService(self.uow).revoke(session.id):
                        await self.uow.commit()
                        logger.info("Session %s revoked on logout", session.id)

        return Return.ok(LogoutResponse(message="Logged out successfully"))
