from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.document_version_repository import IDocumentVersionRepository
from src.domain.entities import DocumentVersion


class DocumentVersionRepository(IDocumentVersionRepository):
    """DocumentVersion repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, version: DocumentVersion) -> DocumentVersion:
        """Insert a version row"""
        self.session.add(version)
        await self.session.flush()
        await self.session.refresh(version)
        return version

    async def get(self, document_id: UUID, version: int) -> Optional[DocumentVersion]:
        """Get one version of a document"""
        stmt = select(DocumentVersion).where(
            DocumentVersion.document_id == document_id,
            DocumentVersion.version == version,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_document(self, document_id: UUID) -> List[DocumentVersion]:
        """List all versions of a document, oldest first"""
        stmt = (
            select(DocumentVersion)
            .where(DocumentVersion.document_id == document_id)
            .order_by(DocumentVersion.version)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
