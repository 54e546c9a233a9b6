from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_log_repository import AuditLogRepository
from src.adapter.repositories.document_repository import DocumentRepository
from src.adapter.repositories.document_version_repository import DocumentVersionRepository
from src.adapter.repositories.permission_repository import PermissionRepository
from src.adapter.repositories.role_repository import RoleRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.roles = RoleRepository(self.session)
        self.permissions = PermissionRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.audit_logs = AuditLogRepository(self.session)
        self.documents = DocumentRepository(self.session)
        self.document_versions = DocumentVersionRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed explicitly is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
