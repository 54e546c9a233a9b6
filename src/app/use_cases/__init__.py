"""
Use Cases

Organized into domain folders:
- auth/: Authentication flows
- users/: User administration
- documents/: Documents and versions
- rbac/: Roles and permissions
- audit/: Audit logs

Each use case is one transaction: authorize, act, audit, commit.
"""

from .auth import (
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
)
from .users import (
    ChangeRoleUseCase,
    ChangeStatusUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    LoadContextUseCase,
)
from .documents import (
    DeleteDocumentUseCase,
    DownloadDocumentUseCase,
    GetDocumentUseCase,
    ListDocumentsUseCase,
    UploadDocumentUseCase,
    UploadVersionUseCase,
)
from .rbac import (
    AssignPermissionUseCase,
    CreatePermissionUseCase,
    CreateRoleUseCase,
    DeleteRoleUseCase,
    ListPermissionsUseCase,
    ListRolesUseCase,
    RemovePermissionUseCase,
    UpdatePermissionUseCase,
    UpdateRoleUseCase,
)
from .audit import (
    GetAuditLogsUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    # Users
    "LoadContextUseCase",
    "CreateUserUseCase",
    "ChangeRoleUseCase",
    "ChangeStatusUseCase",
    "DeleteUserUseCase",
    # Documents
    "UploadDocumentUseCase",
    "UploadVersionUseCase",
    "DownloadDocumentUseCase",
    "ListDocumentsUseCase",
    "GetDocumentUseCase",
    "DeleteDocumentUseCase",
    # RBAC
    "ListRolesUseCase",
    "CreateRoleUseCase",
    "UpdateRoleUseCase",
    "DeleteRoleUseCase",
    "AssignPermissionUseCase",
    "RemovePermissionUseCase",
    "ListPermissionsUseCase",
    "CreatePermissionUseCase",
    "UpdatePermissionUseCase",
    # Audit
    "GetAuditLogsUseCase",
]
