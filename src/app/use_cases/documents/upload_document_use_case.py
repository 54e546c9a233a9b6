"""
Upload Document Use Case

Creates a document together with its first version.
"""

import logging

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.errors import FILE_TOO_LARGE, VALIDATION_FAILED
from src.app.services.audit_recorder import RESOURCE_DOCUMENT, AuditRecorder
from src.app.services.authorization import AuthContext, authorize
from src.app.services.document_version_store import DocumentVersionStore, VersionMetadata
from src.app.services.storage import IStorage
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, Document
from .dtos import DocumentInfo, DocumentVersionInfo, UploadResponse

logger = logging.getLogger(__name__)


class UploadDocumentUseCase:
    """
    Use case for uploading a new document.

    Business Rules:
    - Requires documents.create
    - Caller becomes the owner
    - Creates version 1 with the uploaded content
    - Title must not be blank; content must fit MAX_UPLOAD_BYTES
    - One CREATE audit entry, committed with the document and version rows
    """

    def __init__(self, uow: UnitOfWork, storage: IStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self,
        ctx: AuthContext,
        title: str,
        filename: str,
        content_type: str,
        content: bytes,
    ) -> Result[UploadResponse]:
        allowed = authorize(ctx, "documents.create")
        if allowed.is_err():
            return allowed

        title = title.strip()
        if not title:
            return Return.err(Error(VALIDATION_FAILED, "Title must not be empty"))

        if len(content) > ApplicationConfig.MAX_UPLOAD_BYTES:
            return Return.err(Error(FILE_TOO_LARGE, "File exceeds the upload size limit"))

        async with self.uow:
            document = await self.uow.documents.create(
                Document(title=title, owner_id=ctx.user_id)
            )
            document_id = document.id

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
                    AuditAction.CREATE,
                    RESOURCE_DOCUMENT,
                    document_id,
                    {
                        "title": title,
                        "version": version.version,
                        "filename": version.filename,
                        "size_bytes": version.size_bytes,
                    },
                )
                document = await self.uow.documents.get_by_id(document_id)
                response = UploadResponse(
                    document=DocumentInfo.from_entity(document),
                    version=DocumentVersionInfo.from_entity(version),
                )
                await self.uow.commit()

            logger.info("Document %s created by %s", document_id, ctx.user_id)
            return Return.ok(response)
