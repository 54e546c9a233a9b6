"""
User Management Use Cases

All user-related business logic.
"""

from .load_context_use_case import LoadContextUseCase
from .create_user_use_case import CreateUserUseCase
from .change_role_use_case import ChangeRoleUseCase
from .change_status_use_case import ChangeStatusUseCase
from .delete_user_use_case import DeleteUserUseCase
from .dtos import CreateUserCommand, DeleteUserResponse, UserResponse

__all__ = [
    # Use Cases
    "LoadContextUseCase",
    "CreateUserUseCase",
    "ChangeRoleUseCase",
    "ChangeStatusUseCase",
    "DeleteUserUseCase",
    # DTOs
    "CreateUserCommand",
    "UserResponse",
    "DeleteUserResponse",
]
