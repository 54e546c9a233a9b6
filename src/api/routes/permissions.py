"""
Permission Catalog API Routes

Keys are append-only: they can be created and (de)activated, never renamed
or deleted.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.error import to_http_error
from src.app.services.authorization import AuthContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.rbac import (
    CreatePermissionCommand,
    CreatePermissionUseCase,
    ListPermissionsUseCase,
    PermissionListResponse,
    PermissionResponse,
    UpdatePermissionCommand,
    UpdatePermissionUseCase,
)
from src.depends import get_auth_context, get_unit_of_work

router = APIRouter(prefix="/permissions", tags=["Permissions"])


@router.get("", status_code=status.HTTP_200_OK, response_model=PermissionListResponse)
async def list_permissions(
    module: Optional[str] = Query(None, description="Only permissions of this module"),
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListPermissionsUseCase(uow).execute(ctx, module)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PermissionResponse)
async def create_permission(
    request: CreatePermissionCommand,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Permission

    Raises:
        - 400 Bad Request: Key is not "*", "<resource>.*" or "<resource>.<action>"
        - 409 Conflict: Key already exists
    """
    result = await CreatePermissionUseCase(uow).execute(ctx, request)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.put("/{key}", status_code=status.HTTP_200_OK, response_model=PermissionResponse)
async def update_permission(
    key: str,
    request: UpdatePermissionCommand,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Activate or deactivate a permission key."""
    result = await UpdatePermissionUseCase(uow).execute(ctx, key, request)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
