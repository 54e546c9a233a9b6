"""
Role API Routes
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import to_http_error
from src.app.services.authorization import AuthContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.rbac import (
    AssignPermissionCommand,
    AssignPermissionUseCase,
    CreateRoleCommand,
    CreateRoleUseCase,
    DeleteRoleResponse,
    DeleteRoleUseCase,
    ListRolesUseCase,
    RemovePermissionUseCase,
    RoleListResponse,
    RoleResponse,
    UpdateRoleCommand,
    UpdateRoleUseCase,
)
from src.depends import get_auth_context, get_unit_of_work

router = APIRouter(prefix="/roles", tags=["Roles"])


@router.get("", status_code=status.HTTP_200_OK, response_model=RoleListResponse)
async def list_roles(
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListRolesUseCase(uow).execute(ctx)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RoleResponse)
async def create_role(
    request: CreateRoleCommand,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await CreateRoleUseCase(uow).execute(ctx, request)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.put("/{role_id}", status_code=status.HTTP_200_OK, response_model=RoleResponse)
async def update_role(
    role_id: UUID,
    request: UpdateRoleCommand,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Activate/deactivate a role or edit its display fields."""
    result = await UpdateRoleUseCase(uow).execute(ctx, role_id, request)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.delete("/{role_id}", status_code=status.HTTP_200_OK, response_model=DeleteRoleResponse)
async def delete_role(
    role_id: UUID,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Role

    Raises:
        - 409 Conflict: Role still held by active users (ROLE_IN_USE)
    """
    result = await DeleteRoleUseCase(uow).execute(ctx, role_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post(
    "/{role_id}/permissions",
    status_code=status.HTTP_200_OK,
    response_model=RoleResponse,
)
async def assign_permission(
    role_id: UUID,
    request: AssignPermissionCommand,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await AssignPermissionUseCase(uow).execute(ctx, role_id, request.permission)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.delete(
    "/{role_id}/permissions/{permission_key}",
    status_code=status.HTTP_200_OK,
    response_model=RoleResponse,
)
async def remove_permission(
    role_id: UUID,
    permission_key: str,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RemovePermissionUseCase(uow).execute(ctx, role_id, permission_key)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
