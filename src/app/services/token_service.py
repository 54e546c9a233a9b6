"""
Token Service

Access tokens carry a permission snapshot:
    {sub, email, role: {id, name} | null, permissions: [...], iat, exp}

Refresh tokens carry a session reference and the generation they were minted
for:
    {sub, sessionId, gen, iat, exp}

A refresh token is only exchangeable while its gen equals the session's
current generation. The exchange advances the generation with a
compare-and-swap, which is what stops a replayed or concurrently presented
refresh token from succeeding twice.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import List, Optional
from uuid import UUID

from config import ApplicationConfig
from libs.result import Result, Return
from src.api.utils.jwt import create_token, verify_jwt
from src.app.errors import invalid_session
from src.app.services.permission_resolver import PermissionResolver
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Role, Session, User
from src.domain.permissions import PermissionSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessClaims:
    user_id: UUID
    email: str
    permissions: List[str]
    role_id: Optional[UUID] = None
    role_name: Optional[str] = None


@dataclass(frozen=True)
class RefreshClaims:
    user_id: UUID
    session_id: UUID
    generation: int


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    session_id: UUID
    permissions: PermissionSet
    role: Optional[Role]
    expires_in: int


def access_token_lifetime() -> timedelta:
    return timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES)


def refresh_token_lifetime() -> timedelta:
    return timedelta(days=ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS)


def create_access_token(user: User, role: Optional[Role], permissions: PermissionSet) -> str:
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "role": {"id": str(role.id), "name": role.name} if role else None,
        "permissions": permissions.keys(),
    }
    return create_token(claims, access_token_lifetime())


def create_refresh_token(user_id: UUID, session_id: UUID, generation: int) -> str:
    claims = {
        "sub": str(user_id),
        "sessionId": str(session_id),
        "gen": generation,
    }
    return create_token(claims, refresh_token_lifetime())


def decode_access_token(token: str) -> Optional[AccessClaims]:
    payload = verify_jwt(token)
    if payload is None:
        return None

    permissions = payload.get("permissions")
    # A refresh token has no permission list and is rejected here
    if not isinstance(permissions, list) or "sessionId" in payload:
        return None

    try:
        role = payload.get("role") or {}
        return AccessClaims(
            user_id=UUID(payload["sub"]),
            email=payload.get("email", ""),
            permissions=[str(p) for p in permissions],
            role_id=UUID(role["id"]) if role.get("id") else None,
            role_name=role.get("name"),
        )
    except (KeyError, TypeError, ValueError, AttributeError):
        return None


def decode_refresh_token(token: str) -> Optional[RefreshClaims]:
    payload = verify_jwt(token)
    if payload is None:
        return None
    try:
        return RefreshClaims(
            user_id=UUID(payload["sub"]),
            session_id=UUID(payload["sessionId"]),
            generation=int(payload["gen"]),
        )
    except (KeyError, TypeError, ValueError):
        return None


class TokenService:
    """
    Issues, rotates and revokes tokens inside the caller's unit of work.

    Nothing here commits; the calling use case owns the transaction.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.resolver = PermissionResolver(uow)

    async def issue_tokens(self, user: User) -> TokenPair:
        """Create a new session and mint an access/refresh pair for it."""
        role, permissions = await self._snapshot(user)

        session = Session(
            user_id=user.id,
            generation=0,
            expires_at=utcnow() + refresh_token_lifetime(),
        )
        await self.uow.sessions.create(session)

        return TokenPair(
            access_token=create_access_token(user, role, permissions),
            refresh_token=create_refresh_token(user.id, session.id, session.generation),
            session_id=session.id,
            permissions=permissions,
            role=role,
            expires_in=int(access_token_lifetime().total_seconds()),
        )

    async def refresh(self, refresh_token: str) -> Result[TokenPair]:
        """
        Exchange a refresh token for a new pair.

        Permissions are re-resolved from the store, not copied from the old
        access token. The previous generation is invalidated by the same
        UPDATE that claims the new one.
        """
        claims = decode_refresh_token(refresh_token)
        if claims is None:
            return Return.err(invalid_session())

        session = await self.uow.sessions.get_by_id(claims.session_id)
        if session is None or session.user_id != claims.user_id:
            logger.warning("Refresh with unknown session %s", claims.session_id)
            return Return.err(invalid_session())

        if session.revoked or session.expires_at <= utcnow():
            logger.info("Refresh on revoked or expired session %s", session.id)
            return Return.err(invalid_session())

        if session.generation != claims.generation:
            logger.warning(
                "Refresh token reuse on session %s (presented gen=%d, current gen=%d)",
                session.id,
                claims.generation,
                session.generation,
            )
            return Return.err(invalid_session())

        user = await self.uow.users.get_by_id(claims.user_id)
        if user is None or not user.is_active:
            logger.info("Refresh denied for inactive user %s", claims.user_id)
            return Return.err(invalid_session())

        role, permissions = await self._snapshot(user)

        rotated = await self.uow.sessions.rotate(
            session.id,
            expected_generation=claims.generation,
            expires_at=utcnow() + refresh_token_lifetime(),
        )
        if not rotated:
            logger.warning("Concurrent refresh lost rotation race on session %s", session.id)
            return Return.err(invalid_session())

        new_generation = claims.generation + 1
        return Return.ok(
            TokenPair(
                access_token=create_access_token(user, role, permissions),
                refresh_token=create_refresh_token(user.id, session.id, new_generation),
                session_id=session.id,
                permissions=permissions,
                role=role,
                expires_in=int(access_token_lifetime().total_seconds()),
            )
        )

    async def revoke(self, session_id: UUID) -> bool:
        return await self.uow.sessions.revoke_by_id(session_id)

    async def _snapshot(self, user: User):
        role = await self.uow.roles.get_by_id(user.role_id) if user.role_id else None
        permissions = await self.resolver.resolve(user)
        return role, permissions
