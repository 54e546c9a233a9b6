"""
Authorization Gate

Every use case calls one of these before touching state. A denial returns an
error Result; the caller returns it unchanged, so nothing is written and no
audit entry is produced.

Matching rule for a required key "<resource>.<action>":
    - the exact key is granted, or
    - "<resource>.*" is granted, or
    - "*" is granted.

Ownership-scoped keys come in pairs: "<key>" covers resources the caller owns,
"<key>_all" covers every resource.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import missing_permission
from src.domain.permissions import PermissionSet

logger = logging.getLogger(__name__)

ALL_SUFFIX = "_all"


@dataclass(frozen=True)
class AuthContext:
    """Identity and permission snapshot of the caller, taken from the access token."""

    user_id: UUID
    email: str
    permissions: PermissionSet = field(default_factory=PermissionSet)
    role_id: Optional[UUID] = None
    role_name: Optional[str] = None


def check(permissions: Union[PermissionSet, Iterable[str]], required_key: str) -> bool:
    if not isinstance(permissions, PermissionSet):
        permissions = PermissionSet.from_keys(permissions)
    return permissions.allows(required_key)


def authorize(ctx: AuthContext, required_key: str) -> Result[None]:
    if check(ctx.permissions, required_key):
        return Return.ok(None)
    logger.warning("Permission denied: user=%s missing=%s", ctx.user_id, required_key)
    return Return.err(missing_permission(required_key))


def authorize_owned(ctx: AuthContext, required_key: str, owner_id: UUID) -> Result[None]:
    """Grant with "<key>_all", or with "<key>" when the caller owns the resource."""
    all_key = required_key + ALL_SUFFIX
    if check(ctx.permissions, all_key):
        return Return.ok(None)

    if check(ctx.permissions, required_key):
        if owner_id == ctx.user_id:
            return Return.ok(None)
        logger.warning("Ownership check failed: user=%s missing=%s", ctx.user_id, all_key)
        return Return.err(missing_permission(all_key))

    logger.warning("Permission denied: user=%s missing=%s", ctx.user_id, required_key)
    return Return.err(missing_permission(required_key))


def owner_scope(ctx: AuthContext, required_key: str) -> Result[Optional[UUID]]:
    """
    Resolve the owner filter for a listing.

    Returns None when every resource is visible ("<key>_all"), the caller's
    own id when only "<key>" is granted, and an error otherwise.
    """
    if check(ctx.permissions, required_key + ALL_SUFFIX):
        return Return.ok(None)
    if check(ctx.permissions, required_key):
        return Return.ok(ctx.user_id)
    logger.warning("Permission denied: user=%s missing=%s", ctx.user_id, required_key)
    return Return.err(missing_permission(required_key))
