"""
Delete Document Use Case

Soft-deletes a document. Versions and stored content are kept.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import DOCUMENT_NOT_FOUND
from src.app.services.audit_recorder import RESOURCE_DOCUMENT, AuditRecorder
from src.app.services.authorization import AuthContext, authorize_owned, owner_scope
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditAction
from .dtos import DeleteDocumentResponse

logger = logging.getLogger(__name__)


class DeleteDocumentUseCase:
    """
    Use case for deleting a document.

    Business Rules:
    - Requires documents.delete on own documents, documents.delete_all otherwise
    - Soft delete: deleted_at is set, nothing is removed from storage
    - Deleting an already deleted document is DOCUMENT_NOT_FOUND
    - One DELETE audit entry, committed with the update
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: AuthContext, document_id: UUID) -> Result[DeleteDocumentResponse]:
        scope = owner_scope(ctx, "documents.delete")
        if scope.is_err():
            return scope

        async with self.uow:
            document = await self.uow.documents.get_by_id(document_id)
            if document is None or document.deleted_at is not None:
                return Return.err(Error(DOCUMENT_NOT_FOUND, "Document not found"))

            allowed = authorize_owned(ctx, "documents.delete", document.owner_id)
            if allowed.is_err():
                return allowed

            now = utcnow()
            document.deleted_at = now
            document.updated_at = now
            await self.uow.documents.update(document)

            await AuditRecorder(self.uow).record(
                ctx.user_id,
                AuditAction.DELETE,
                RESOURCE_DOCUMENT,
                document.id,
                {"title": document.title, "current_version": document.current_version},
            )

            await self.uow.commit()

            logger.info("Document %s deleted by %s", document.id, ctx.user_id)
            return Return.ok(DeleteDocumentResponse(id=str(document.id), deleted_at=now))
