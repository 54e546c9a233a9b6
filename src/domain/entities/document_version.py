"""
DocumentVersion Entity

Immutable snapshot of a document's content.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class DocumentVersion(SQLModel, table=True):
    """
    DocumentVersion entity.

    Business Rules:
    - (document_id, version) is unique; versions start at 1 and only grow
    - storage_key is derived from (document_id, version) and never reused
    - Never updated or deleted once written
    """

    __tablename__ = "document_versions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    document_id: UUID = Field(foreign_key="documents.id", nullable=False, index=True)
    version: int = Field(nullable=False)

    storage_key: str = Field(max_length=512)
    filename: str = Field(max_length=255)
    content_type: str = Field(default="application/octet-stream", max_length=128)
    size_bytes: int = Field(nullable=False)
    sha256: str = Field(max_length=64)

    created_by: UUID = Field(foreign_key="users.id", nullable=False)
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("uq_document_version", "document_id", "version", unique=True),
    )
