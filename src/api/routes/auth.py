from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError, to_http_error
from src.app.errors import INVALID_SESSION
from src.app.services.authorization import AuthContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    MeResponse,
    RefreshTokenResponse,
    RefreshTokenUseCase,
)
from src.app.use_cases.users import LoadContextUseCase
from src.depends import get_auth_context, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=ApplicationConfig.REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=ApplicationConfig.REFRESH_COOKIE_SECURE,
        samesite="strict",
    )


def _clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(
        key=ApplicationConfig.REFRESH_COOKIE_NAME,
        httponly=True,
        secure=ApplicationConfig.REFRESH_COOKIE_SECURE,
        samesite="strict",
    )


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Login

    Authenticates user and returns an access token carrying the user's
    permission snapshot. The refresh token is set as an HttpOnly cookie.

    Raises:
        - 401 Unauthorized: Invalid credentials or inactive account
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        raise to_http_error(result.error)

    _set_refresh_cookie(response, result.value.refresh_token)
    return result.value


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Refresh JWT Token

    Exchanges the refresh cookie for a new access token and rotates the
    cookie. A refresh token works once: replaying it, or racing a second
    request with it, fails.

    Raises:
        - 401 Unauthorized: Missing, reused, expired or revoked refresh token
        - 500 Internal Server Error: Server error
    """
    refresh_token = request.cookies.get(ApplicationConfig.REFRESH_COOKIE_NAME)
    if not refresh_token:
        raise ClientError(
            Error(INVALID_SESSION, "Invalid or expired session"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    use_case = RefreshTokenUseCase(uow)
    result = await use_case.execute(refresh_token)

    if result.is_err():
        raise to_http_error(result.error)

    _set_refresh_cookie(response, result.value.refresh_token)
    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Revokes the session behind the refresh cookie, if any, and clears the
    cookie. Always succeeds.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(request.cookies.get(ApplicationConfig.REFRESH_COOKIE_NAME))

    if result.is_err():
        raise to_http_error(result.error)

    _clear_refresh_cookie(response)
    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current User

    Returns the caller's profile with the role and permissions of the
    presented access token.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token
    """
    use_case = LoadContextUseCase(uow)
    result = await use_case.execute(ctx)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
