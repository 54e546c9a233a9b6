from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str, include_deleted: bool = False) -> Optional[User]:
        """Get user by email address, skipping soft-deleted users unless asked"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID (soft-deleted users included)"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def count_active_by_role(self, role_id: UUID) -> int:
        """Count active, non-deleted users holding the role"""
        pass

    @abstractmethod
    async def clear_role(self, role_id: UUID) -> int:
        """Detach the role from every user still pointing at it. Returns count."""
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: List[UUID]) -> List[User]:
        """Get users by a list of IDs"""
        pass
