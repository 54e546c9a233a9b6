"""
User Administration API Routes
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import Field

from src.api.error import to_http_error
from src.app.services.authorization import AuthContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.base_dto import ApiModel
from src.app.use_cases.users import (
    ChangeRoleUseCase,
    ChangeStatusUseCase,
    CreateUserCommand,
    CreateUserUseCase,
    DeleteUserResponse,
    DeleteUserUseCase,
    UserResponse,
)
from src.depends import get_auth_context, get_unit_of_work

router = APIRouter(prefix="/users", tags=["User"])


class ChangeRoleRequest(ApiModel):
    """PUT /users/{id}/role payload. roleId null removes the role."""

    role_id: Optional[UUID] = Field(..., description="Role to assign")


class ChangeStatusRequest(ApiModel):
    status: str = Field(..., description="active, inactive, suspended or pending")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_user(
    request: CreateUserCommand,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create User

    Raises:
        - 403 Forbidden: Missing users.create
        - 404 Not Found: Unknown role
        - 409 Conflict: Email already exists
    """
    use_case = CreateUserUseCase(uow)
    result = await use_case.execute(ctx, request)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.put("/{user_id}/role", status_code=status.HTTP_200_OK, response_model=UserResponse)
async def change_role(
    user_id: UUID,
    request: ChangeRoleRequest,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change User Role

    Takes effect at the user's next login or token refresh.
    """
    use_case = ChangeRoleUseCase(uow)
    result = await use_case.execute(ctx, user_id, request.role_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.put("/{user_id}/status", status_code=status.HTTP_200_OK, response_model=UserResponse)
async def change_status(
    user_id: UUID,
    request: ChangeStatusRequest,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change User Status

    Any status other than active revokes the user's refresh sessions.
    """
    use_case = ChangeStatusUseCase(uow)
    result = await use_case.execute(ctx, user_id, request.status)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.delete("/{user_id}", status_code=status.HTTP_200_OK, response_model=DeleteUserResponse)
async def delete_user(
    user_id: UUID,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Soft-delete a user and revoke their sessions."""
    use_case = DeleteUserUseCase(uow)
    result = await use_case.execute(ctx, user_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
