"""
RolePermission Entity

Join table between roles and permissions.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class RolePermission(SQLModel, table=True):
    __tablename__ = "role_permissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    role_id: UUID = Field(foreign_key="roles.id", nullable=False, index=True)
    permission_id: UUID = Field(foreign_key="permissions.id", nullable=False, index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("uk_role_permission", "role_id", "permission_id", unique=True),
    )
