from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Permission


class IPermissionRepository(ABC):
    """Permission repository interface - application layer"""

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Permission]:
        """Get permission by key"""
        pass

    @abstractmethod
    async def list_all(self, module: Optional[str] = None) -> List[Permission]:
        """List permissions, optionally restricted to one module"""
        pass

    @abstractmethod
    async def create(self, permission: Permission) -> Permission:
        """Create a new permission"""
        pass

    @abstractmethod
    async def update(self, permission: Permission) -> Permission:
        """Update existing permission"""
        pass

    @abstractmethod
    async def get_keys_for_role(self, role_id: UUID, active_only: bool = True) -> List[str]:
        """
        Get permission keys assigned to a role.

        With active_only, both the role and each permission must be active;
        an inactive role yields an empty list.
        """
        pass
