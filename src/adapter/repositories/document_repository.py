from typing import List, Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.document_repository import IDocumentRepository
from src.domain.base import utcnow
from src.domain.entities import Document


class DocumentRepository(IDocumentRepository):
    """Document repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, document_id: UUID) -> Optional[Document]:
        """Get document by ID"""
        stmt = select(Document).where(Document.id == document_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_active(self, owner_id: Optional[UUID] = None) -> List[Document]:
        """List non-deleted documents, newest first"""
        stmt = select(Document).where(Document.deleted_at == None)  # noqa: E711
        if owner_id is not None:
            stmt = stmt.where(Document.owner_id == owner_id)
        stmt = stmt.order_by(Document.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, document: Document) -> Document:
        """Create a new document"""
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def update(self, document: Document) -> Document:
        """Update existing document"""
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def advance_version(self, document_id: UUID, expected_version: int) -> bool:
        """Compare-and-swap on current_version"""
        stmt = (
            update(Document)
            .where(
                Document.id == document_id,
                Document.current_version == expected_version,
            )
            .values(current_version=expected_version + 1, updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
