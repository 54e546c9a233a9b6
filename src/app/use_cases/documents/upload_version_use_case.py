"""
Upload Version Use Case

Appends a new version to an existing document.
"""

import logging
from uuid import UUID

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.errors import DOCUMENT_NOT_FOUND, FILE_TOO_LARGE
from src.app.services.audit_recorder import RESOURCE_DOCUMENT, AuditRecorder
from src.app.services.authorization import AuthContext, authorize_owned, owner_scope
from src.app.services.document_version_store import DocumentVersionStore, VersionMetadata
from src.app.services.storage import IStorage
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction
from .dtos import DocumentInfo, DocumentVersionInfo, UploadResponse

logger = logging.getLogger(__name__)


class UploadVersionUseCase:
    """
    Use case for uploading a new version of a document.

    Business Rules:
    - Requires documents.edit on own documents, documents.edit_all otherwise
    - Deleted documents cannot receive versions
    - Version number is current_version + 1, assigned race-free by the
      version store; concurrent uploads each get a distinct number
    - One UPDATE audit entry, committed with the version row
    """

    def __init__(self, uow: UnitOfWork, storage: IStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self,
        ctx: AuthContext,
        document_id: UUID,
        filename: str,
        content_type: str,
        content: bytes,
    ) -> Result[UploadResponse]:
        scope = owner_scope(ctx, "documents.edit")
        if scope.is_err():
            return scope

        if len(content) > ApplicationConfig.MAX_UPLOAD_BYTES:
            return Return.err(Error(FILE_TOO_LARGE, "File exceeds the upload size limit"))

        async with self.uow:
            document = await self.uow.documents.get_by_id(document_id)
            if document is None or document.deleted_at is not None:
                return Return.err(Error(DOCUMENT_NOT_FOUND, "Document not found"))

            allowed = authorize_owned(ctx, "documents.edit", document.owner_id)
            if allowed.is_err():
                return allowed

            store = DocumentVersionStore(self.uow, self.storage)
            created = await store.create_version(
                document_id,
                content,
                VersionMetadata(
                    filename=filename,
                    content_type=content_type,
                    created_by=ctx.user_id,
                ),
            )
            if created.is_err():
                return created
            version = created.value

            async with store.pending_content(version):
                await AuditRecorder(self.uow).record(
                    ctx.user_id,
                    AuditAction.UPDATE,
                    RESOURCE_DOCUMENT,
                    document_id,
                    {
                        "version": version.version,
                        "filename": version.filename,
                        "size_bytes": version.size_bytes,
                    },
                )
                # Re-read: a retried claim expires the instance loaded above
                document = await self.uow.documents.get_by_id(document_id)
                response = UploadResponse(
                    document=DocumentInfo.from_entity(document),
                    version=DocumentVersionInfo.from_entity(version),
                )
                await self.uow.commit()

            logger.info(
                "Version %d of document %s uploaded by %s",
                version.version,
                document_id,
                ctx.user_id,
            )
            return Return.ok(response)
