"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import AuditAction, UserStatus

# Export all entities
from .role import Role
from .permission import Permission
from .role_permission import RolePermission
from .user import User
from .session import Session
from .audit_log_entry import AuditLogEntry
from .document import Document
from .document_version import DocumentVersion

__all__ = [
    # Enums
    "AuditAction",
    "UserStatus",
    # Entities
    "Role",
    "Permission",
    "RolePermission",
    "User",
    "Session",
    "AuditLogEntry",
    "Document",
    "DocumentVersion",
]
