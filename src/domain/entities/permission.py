"""
Permission Entity

A permission key in resource.action form, e.g. documents.delete_all.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Permission(SQLModel, table=True):
    """
    Permission entity.

    Business Rules:
    - name is the permission key and is unique
    - Keys are append-only: never renamed, only deactivated, because issued
      tokens carry them verbatim until they expire
    - Inactive permissions are dropped at resolution time
    """

    __tablename__ = "permissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)
    display_name: str = Field(max_length=150)
    description: Optional[str] = Field(default=None)
    module: str = Field(max_length=50, index=True)

    is_active: bool = Field(default=True, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
