from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import DocumentVersion


class IDocumentVersionRepository(ABC):
    """DocumentVersion repository interface - application layer"""

    @abstractmethod
    async def create(self, version: DocumentVersion) -> DocumentVersion:
        """Insert a version row. Raises IntegrityError on a duplicate number."""
        pass

    @abstractmethod
    async def get(self, document_id: UUID, version: int) -> Optional[DocumentVersion]:
        """Get one version of a document"""
        pass

    @abstractmethod
    async def list_by_document(self, document_id: UUID) -> List[DocumentVersion]:
        """List all versions of a document, oldest first"""
        pass
