"""
AuditLogEntry Entity

Immutable record of an authorized mutation or sensitive read.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow
from .enums import AuditAction


class AuditLogEntry(SQLModel, table=True):
    """
    AuditLogEntry entity - append-only audit trail.

    Business Rules:
    - Immutable (never updated or deleted)
    - Written in the same transaction as the operation it describes
    - Metadata stores operation context (version number, old/new role, ...)
    """

    __tablename__ = "audit_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: Optional[UUID] = Field(default=None, index=True)

    action: AuditAction = Field(nullable=False)
    resource_type: str = Field(max_length=50)
    resource_id: str = Field(max_length=64)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_resource", "resource_type", "resource_id"),
        Index("idx_audit_user_id", "user_id"),
    )
