"""
Download Document Use Case

Returns the content of a document version and records the access.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import DOCUMENT_NOT_FOUND, VERSION_NOT_FOUND
from src.app.services.audit_recorder import RESOURCE_DOCUMENT, AuditRecorder
from src.app.services.authorization import AuthContext, authorize_owned, owner_scope
from src.app.services.document_version_store import DocumentVersionStore
from src.app.services.storage import IStorage
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction
from .dtos import DownloadResult

logger = logging.getLogger(__name__)


class DownloadDocumentUseCase:
    """
    Use case for downloading document content.

    Business Rules:
    - Requires documents.view on own documents, documents.view_all otherwise
    - Without a version: the current version of a non-deleted document
    - With a version: that exact version, even after the document was
      soft-deleted (versions outlive their document)
    - Every successful download writes one ACCESS audit entry
    """

    def __init__(self, uow: UnitOfWork, storage: IStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self, ctx: AuthContext, document_id: UUID, version: Optional[int] = None
    ) -> Result[DownloadResult]:
        """
        Execute download use case.

        Args:
            ctx: Caller's auth context
            document_id: Document to download
            version: Specific version number, or None for the current one

        Returns:
            Result with DownloadResult, or Error
        """
        scope = owner_scope(ctx, "documents.view")
        if scope.is_err():
            return scope

        async with self.uow:
            document = await self.uow.documents.get_by_id(document_id)
            if document is None or (version is None and document.deleted_at is not None):
                return Return.err(Error(DOCUMENT_NOT_FOUND, "Document not found"))

            allowed = authorize_owned(ctx, "documents.view", document.owner_id)
            if allowed.is_err():
                return allowed

            store = DocumentVersionStore(self.uow, self.storage)
            wanted = version if version is not None else document.current_version
            stored = await store.get_version(document_id, wanted)
            if stored is None:
                return Return.err(Error(VERSION_NOT_FOUND, "Version not found"))

            content = await store.read_content(stored)
            if content.is_err():
                return content

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.ACCESS,
                RESOURCE_DOCUMENT,
                document_id,
                {"version": stored.version},
            )

            await self.uow.commit()

            logger.info(
                "Version %d of document %s downloaded by %s",
                stored.version,
                document_id,
                ctx.user_id,
            )
            return Return.ok(
                DownloadResult(
                    content=content.value,
                    filename=stored.filename,
                    content_type=stored.content_type,
                    version=stored.version,
                )
            )
