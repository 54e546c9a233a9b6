"""
Authentication Use Cases

All authentication-related business logic.
"""

from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .dtos import (
    LoginResponse,
    LogoutResponse,
    MeResponse,
    RefreshTokenResponse,
    RoleInfo,
    UserInfo,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    # DTOs - Responses
    "LoginResponse",
    "RefreshTokenResponse",
    "LogoutResponse",
    "MeResponse",
    # DTOs - Nested Models
    "RoleInfo",
    "UserInfo",
]
