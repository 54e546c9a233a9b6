"""
User Entity

A person who can sign in. Holds exactly one role.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import UserStatus


class User(SQLModel, table=True):
    """
    User entity - an account that authenticates with email and password.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash
    - Exactly one role (nullable); reassigned only by a privileged mutation
    - Never hard-deleted: deleted_at marks a soft delete
    - Only status=active users can sign in or refresh
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    status: UserStatus = Field(default=UserStatus.active)
    role_id: Optional[UUID] = Field(default=None, foreign_key="roles.id", index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Soft delete
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_status", "status"),
        Index("idx_user_deleted_at", "deleted_at"),
    )

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.active and self.deleted_at is None
