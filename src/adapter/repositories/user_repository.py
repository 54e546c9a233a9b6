from typing import List, Optional
from uuid import UUID

from sqlmodel import func, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User, UserStatus


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str, include_deleted: bool = False) -> Optional[User]:
        """Get user by email address, skipping soft-deleted users unless asked"""
        stmt = select(User).where(User.email == email)
        if not include_deleted:
            stmt = stmt.where(User.deleted_at == None)  # noqa: E711
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def count_active_by_role(self, role_id: UUID) -> int:
        """Count active, non-deleted users holding the role"""
        stmt = select(func.count()).select_from(User).where(
            User.role_id == role_id,
            User.status == UserStatus.active,
            User.deleted_at == None,  # noqa: E711
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def clear_role(self, role_id: UUID) -> int:
        """Detach the role from every user still pointing at it"""
        stmt = update(User).where(User.role_id == role_id).values(role_id=None)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def get_by_ids(self, user_ids: List[UUID]) -> List[User]:
        """Get users by a list of IDs"""
        if not user_ids:
            return []
        stmt = select(User).where(User.id.in_(user_ids))
        result = await self.session.exec(stmt)
        return list(result.all())
