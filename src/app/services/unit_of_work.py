from abc import ABC, abstractmethod

from src.app.repositories.audit_log_repository import IAuditLogRepository
from src.app.repositories.document_repository import IDocumentRepository
from src.app.repositories.document_version_repository import IDocumentVersionRepository
from src.app.repositories.permission_repository import IPermissionRepository
from src.app.repositories.role_repository import IRoleRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    roles: IRoleRepository
    permissions: IPermissionRepository
    sessions: ISessionRepository
    audit_logs: IAuditLogRepository
    documents: IDocumentRepository
    document_versions: IDocumentVersionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
