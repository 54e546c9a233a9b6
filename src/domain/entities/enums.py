"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    inactive = "inactive"
    suspended = "suspended"
    pending = "pending"


class AuditAction(str, Enum):
    """Kind of operation recorded in the audit log"""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ACCESS = "ACCESS"
