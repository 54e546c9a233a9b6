from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def rotate(
        self, session_id: UUID, expected_generation: int, expires_at: datetime
    ) -> bool:
        """
        Advance the session generation if it still equals expected_generation.

        Compare-and-swap in a single UPDATE; returns False when another
        refresh already rotated the session or it was revoked.
        """
        pass

    @abstractmethod
    async def revoke_by_id(self, session_id: UUID) -> bool:
        """Revoke a specific session. Returns True if session existed and was revoked."""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID) -> int:
        """Revoke all sessions for a user. Returns count of revoked sessions."""
        pass
