"""
Document Entity

A versioned document owned by one user.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Document(SQLModel, table=True):
    """
    Document entity.

    Business Rules:
    - id is a random UUID (non-guessable)
    - current_version is 0 until the first version lands, then points at the
      highest version number
    - Soft delete only: deleted_at hides the document from listings but its
      versions and stored content stay retrievable
    """

    __tablename__ = "documents"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=255)

    owner_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    current_version: int = Field(default=0, nullable=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_document_deleted_at", "deleted_at"),)
