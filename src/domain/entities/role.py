"""
Role Entity

Named bundle of permissions. Each user holds at most one role.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Role(SQLModel, table=True):
    """
    Role entity - RBAC role mapped many-to-many to permissions.

    Business Rules:
    - Name is unique
    - Inactive roles grant no permissions
    - A role held by active users cannot be hard-deleted, only deactivated
    """

    __tablename__ = "roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=50)
    display_name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None)

    is_active: bool = Field(default=True, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
