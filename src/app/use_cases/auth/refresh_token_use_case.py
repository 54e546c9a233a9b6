"""
Refresh Token Use Case

Exchanges a refresh token for a new access token, rotating the refresh token.
"""

from libs.result import Result, Return
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import RefreshTokenResponse


class RefreshTokenUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Refresh token rotation: old token invalidated, new token issued
    - Of two concurrent exchanges of one token, exactly one succeeds
    - Session must not be revoked or expired
    - User must still be active
    - Permissions are re-resolved, so role changes apply from here on
    - Every failure looks the same to the caller (INVALID_SESSION)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate

        Returns:
            Result with RefreshTokenResponse containing new tokens, or Error
        """
        async with self.uow:
            result = await TokenService(self.uow).refresh(refresh_token)
            if result.is_err():
                return result

            await self.uow.commit()

            tokens = result.value
            return Return.ok(
                RefreshTokenResponse(
                    access_token=tokens.access_token,
                    expires_in=tokens.expires_in,
                    refresh_token=tokens.refresh_token,
                )
            )
