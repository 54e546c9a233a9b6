"""
RBAC Administration Use Cases

Role and permission catalog management.
"""

from .list_roles_use_case import ListRolesUseCase
from .create_role_use_case import CreateRoleUseCase
from .update_role_use_case import UpdateRoleUseCase
from .delete_role_use_case import DeleteRoleUseCase
from .assign_permission_use_case import AssignPermissionUseCase, RemovePermissionUseCase
from .permission_use_cases import (
    CreatePermissionUseCase,
    ListPermissionsUseCase,
    UpdatePermissionUseCase,
)
from .dtos import (
    AssignPermissionCommand,
    CreatePermissionCommand,
    CreateRoleCommand,
    DeleteRoleResponse,
    PermissionListResponse,
    PermissionResponse,
    RoleListResponse,
    RoleResponse,
    UpdatePermissionCommand,
    UpdateRoleCommand,
)

__all__ = [
    # Use Cases - Roles
    "ListRolesUseCase",
    "CreateRoleUseCase",
    "UpdateRoleUseCase",
    "DeleteRoleUseCase",
    "AssignPermissionUseCase",
    "RemovePermissionUseCase",
    # Use Cases - Permissions
    "ListPermissionsUseCase",
    "CreatePermissionUseCase",
    "UpdatePermissionUseCase",
    # DTOs - Commands
    "CreateRoleCommand",
    "UpdateRoleCommand",
    "AssignPermissionCommand",
    "CreatePermissionCommand",
    "UpdatePermissionCommand",
    # DTOs - Responses
    "RoleResponse",
    "RoleListResponse",
    "DeleteRoleResponse",
    "PermissionResponse",
    "PermissionListResponse",
]
