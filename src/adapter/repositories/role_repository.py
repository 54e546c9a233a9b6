from typing import List, Optional
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.role_repository import IRoleRepository
from src.domain.entities import Role, RolePermission


class RoleRepository(IRoleRepository):
    """Role repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, role_id: UUID) -> Optional[Role]:
        """Get role by ID"""
        stmt = select(Role).where(Role.id == role_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get role by unique name"""
        stmt = select(Role).where(Role.name == name)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self) -> List[Role]:
        """List all roles ordered by name"""
        stmt = select(Role).order_by(Role.name)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, role: Role) -> Role:
        """Create a new role"""
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def update(self, role: Role) -> Role:
        """Update existing role"""
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def delete(self, role: Role) -> None:
        """Hard-delete a role together with its permission assignments"""
        await self.session.execute(
            delete(RolePermission).where(RolePermission.role_id == role.id)
        )
        await self.session.delete(role)
        await self.session.flush()

    async def add_permission(self, role_id: UUID, permission_id: UUID) -> None:
        """Assign a permission to a role"""
        self.session.add(RolePermission(role_id=role_id, permission_id=permission_id))
        await self.session.flush()

    async def remove_permission(self, role_id: UUID, permission_id: UUID) -> bool:
        """Unassign a permission from a role"""
        stmt = delete(RolePermission).where(
            RolePermission.role_id == role_id,
            RolePermission.permission_id == permission_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def has_permission(self, role_id: UUID, permission_id: UUID) -> bool:
        """Check whether the (role, permission) pair exists"""
        stmt = select(RolePermission.id).where(
            RolePermission.role_id == role_id,
            RolePermission.permission_id == permission_id,
        )
        result = await self.session.exec(stmt)
        return result.first() is not None
