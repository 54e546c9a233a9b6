import logging

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.domain.permissions import PermissionSet

logger = logging.getLogger(__name__)


class PermissionResolver:
    """
    Flattens a user's role into a PermissionSet.

    Called when tokens are issued or refreshed, never per request: the result
    becomes the token's permission snapshot. A permission revoked in the
    database keeps working for holders of an already-issued access token
    until it expires (ACCESS_TOKEN_EXPIRE_MINUTES bounds that window).

    Wildcard keys are kept as grants; they are matched at check time.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def resolve(self, user: User) -> PermissionSet:
        if user.role_id is None:
            return PermissionSet()

        keys = await self.uow.permissions.get_keys_for_role(user.role_id, active_only=True)
        permissions = PermissionSet.from_keys(keys)
        logger.debug("Resolved %d permissions for user %s", len(permissions), user.id)
        return permissions
