from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.permission_repository import IPermissionRepository
from src.domain.entities import Permission, Role, RolePermission


class PermissionRepository(IPermissionRepository):
    """Permission repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_name(self, name: str) -> Optional[Permission]:
        """Get permission by key"""
        stmt = select(Permission).where(Permission.name == name)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self, module: Optional[str] = None) -> List[Permission]:
        """List permissions, optionally restricted to one module"""
        stmt = select(Permission)
        if module:
            stmt = stmt.where(Permission.module == module)
        stmt = stmt.order_by(Permission.module, Permission.name)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, permission: Permission) -> Permission:
        """Create a new permission"""
        self.session.add(permission)
        await self.session.flush()
        await self.session.refresh(permission)
        return permission

    async def update(self, permission: Permission) -> Permission:
        """Update existing permission"""
        self.session.add(permission)
        await self.session.flush()
        await self.session.refresh(permission)
        return permission

    async def get_keys_for_role(self, role_id: UUID, active_only: bool = True) -> List[str]:
        """
        Get permission keys assigned to a role.

        Single join: roles -> role_permissions -> permissions.
        """
        stmt = (
            select(Permission.name)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .join(Role, Role.id == RolePermission.role_id)
            .where(Role.id == role_id)
        )
        if active_only:
            stmt = stmt.where(Role.is_active == True, Permission.is_active == True)  # noqa: E712
        stmt = stmt.order_by(Permission.name)
        result = await self.session.exec(stmt)
        return list(result.all())
