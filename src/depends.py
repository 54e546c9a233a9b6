from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.local_storage import LocalStorage
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.errors import UNAUTHENTICATED
from src.app.services.authorization import AuthContext
from src.app.services.storage import IStorage
from src.app.services.token_service import decode_access_token
from src.domain.permissions import PermissionSet

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# auto_error=False: a missing header is answered with our own 401 body
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_storage() -> IStorage:
    return LocalStorage(ApplicationConfig.STORAGE_ROOT)


async def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthContext:
    """
    Dependency to build the caller's AuthContext from the bearer access token.

    The permission snapshot inside the token is parsed once here and travels
    with the context into the use case.

    Raises:
        ClientError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise ClientError(
            Error(UNAUTHENTICATED, "Missing bearer token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise ClientError(
            Error(UNAUTHENTICATED, "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return AuthContext(
        user_id=claims.user_id,
        email=claims.email,
        permissions=PermissionSet.from_keys(claims.permissions),
        role_id=claims.role_id,
        role_name=claims.role_name,
    )
