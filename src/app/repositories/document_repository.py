from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Document


class IDocumentRepository(ABC):
    """Document repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, document_id: UUID) -> Optional[Document]:
        """Get document by ID (soft-deleted documents included)"""
        pass

    @abstractmethod
    async def list_active(self, owner_id: Optional[UUID] = None) -> List[Document]:
        """List non-deleted documents, optionally only those owned by owner_id"""
        pass

    @abstractmethod
    async def create(self, document: Document) -> Document:
        """Create a new document"""
        pass

    @abstractmethod
    async def update(self, document: Document) -> Document:
        """Update existing document"""
        pass

    @abstractmethod
    async def advance_version(self, document_id: UUID, expected_version: int) -> bool:
        """
        Move current_version from expected_version to expected_version + 1.

        Compare-and-swap in a single UPDATE; returns False when a concurrent
        upload claimed the number first.
        """
        pass
