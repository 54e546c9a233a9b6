"""
User Management DTOs (Data Transfer Objects)

Commands and responses for admin actions on user accounts.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from src.app.use_cases.base_dto import ApiModel
from src.domain.entities import User, UserStatus


class CreateUserCommand(ApiModel):
    """Input for creating a user account"""

    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    role_id: Optional[UUID] = None
    status: UserStatus = UserStatus.active


class UserResponse(ApiModel):
    """User account as returned by admin endpoints"""

    id: str
    email: str
    first_name: str
    last_name: str
    status: str
    role_id: Optional[str]
    created_at: datetime
    last_login_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            status=user.status.value,
            role_id=str(user.role_id) if user.role_id else None,
            created_at=user.created_at,
            last_login_at=user.last_login_at,
            deleted_at=user.deleted_at,
        )


class DeleteUserResponse(ApiModel):
    """Response for user soft delete"""

    id: str
    revoked_sessions: int
