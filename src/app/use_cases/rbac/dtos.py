"""
RBAC Use Case DTOs (Data Transfer Objects)

Commands and responses for role and permission administration.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from src.app.use_cases.base_dto import ApiModel
from src.domain.entities import Permission, Role


class CreateRoleCommand(ApiModel):
    name: str = Field(min_length=1, max_length=50)
    display_name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None


class UpdateRoleCommand(ApiModel):
    """Partial role update. Unset fields are left as they are."""

    is_active: Optional[bool] = None
    display_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None


class AssignPermissionCommand(ApiModel):
    permission: str = Field(min_length=1, max_length=100)


class CreatePermissionCommand(ApiModel):
    key: str = Field(min_length=1, max_length=100)
    display_name: str = Field(min_length=1, max_length=150)
    description: Optional[str] = None
    module: Optional[str] = Field(default=None, max_length=50)


class UpdatePermissionCommand(ApiModel):
    is_active: bool


class RoleResponse(ApiModel):
    id: str
    name: str
    display_name: str
    description: Optional[str]
    is_active: bool
    permissions: List[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, role: Role, permissions: List[str]) -> "RoleResponse":
        return cls(
            id=str(role.id),
            name=role.name,
            display_name=role.display_name,
            description=role.description,
            is_active=role.is_active,
            permissions=permissions,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )


class RoleListResponse(ApiModel):
    roles: List[RoleResponse]


class DeleteRoleResponse(ApiModel):
    id: str
    detached_users: int


class PermissionResponse(ApiModel):
    id: str
    key: str
    display_name: str
    description: Optional[str]
    module: str
    is_active: bool

    @classmethod
    def from_entity(cls, permission: Permission) -> "PermissionResponse":
        return cls(
            id=str(permission.id),
            key=permission.name,
            display_name=permission.display_name,
            description=permission.description,
            module=permission.module,
            is_active=permission.is_active,
        )


class PermissionListResponse(ApiModel):
    permissions: List[PermissionResponse]
