"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import List, Optional

from pydantic import Field

from src.app.use_cases.base_dto import ApiModel
from src.domain.entities import Role, User


class RoleInfo(ApiModel):
    """Role reference embedded in user payloads"""

    id: str
    name: str


class UserInfo(ApiModel):
    """Authenticated user with the permission snapshot of the issued token"""

    id: str
    email: str
    first_name: str
    last_name: str
    status: str
    role: Optional[RoleInfo]
    permissions: List[str]

    @classmethod
    def build(cls, user: User, role: Optional[Role], permissions: List[str]) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            status=user.status.value,
            role=RoleInfo(id=str(role.id), name=role.name) if role else None,
            permissions=permissions,
        )


class LoginResponse(ApiModel):
    """Response for user login use case. The refresh token travels in a cookie."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: UserInfo
    refresh_token: Optional[str] = Field(default=None, exclude=True)


class RefreshTokenResponse(ApiModel):
    """Response for refresh token use case"""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    refresh_token: Optional[str] = Field(default=None, exclude=True)


class LogoutResponse(ApiModel):
    """Response for logout use case"""

    message: str


class MeResponse(ApiModel):
    """Response for current user lookup"""

    user: UserInfo
