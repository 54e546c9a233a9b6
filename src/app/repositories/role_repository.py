from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Role


class IRoleRepository(ABC):
    """Role repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, role_id: UUID) -> Optional[Role]:
        """Get role by ID"""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get role by unique name"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Role]:
        """List all roles ordered by name"""
        pass

    @abstractmethod
    async def create(self, role: Role) -> Role:
        """Create a new role"""
        pass

    @abstractmethod
    async def update(self, role: Role) -> Role:
        """Update existing role"""
        pass

    @abstractmethod
    async def delete(self, role: Role) -> None:
        """Hard-delete a role together with its permission assignments"""
        pass

    @abstractmethod
    async def add_permission(self, role_id: UUID, permission_id: UUID) -> None:
        """Assign a permission to a role. Raises IntegrityError on a duplicate pair."""
        pass

    @abstractmethod
    async def remove_permission(self, role_id: UUID, permission_id: UUID) -> bool:
        """Unassign a permission. Returns True if an assignment was removed."""
        pass

    @abstractmethod
    async def has_permission(self, role_id: UUID, permission_id: UUID) -> bool:
        """Check whether the (role, permission) pair exists"""
        pass
