"""
Get Document Use Case

Returns a document's metadata and version history.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import DOCUMENT_NOT_FOUND
from src.app.services.authorization import AuthContext, authorize_owned, owner_scope
from src.app.services.unit_of_work import UnitOfWork
from .dtos import DocumentDetail, DocumentInfo, DocumentVersionInfo


class GetDocumentUseCase:
    """
    Use case for reading document metadata.

    Business Rules:
    - Requires documents.view on own documents, documents.view_all otherwise
    - Soft-deleted documents are not found here; their versions stay
      reachable through versioned download
    - Metadata reads are not audited, only content access is
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: AuthContext, document_id: UUID) -> Result[DocumentDetail]:
        scope = owner_scope(ctx, "documents.view")
        if scope.is_err():
            return scope

        async with self.uow:
            document = await self.uow.documents.get_by_id(document_id)
            if document is None or document.deleted_at is not None:
                return Return.err(Error(DOCUMENT_NOT_FOUND, "Document not found"))

            allowed = authorize_owned(ctx, "documents.view", document.owner_id)
            if allowed.is_err():
                return allowed

            versions = await self.uow.document_versions.list_by_document(document_id)

            info = DocumentInfo.from_entity(document)
            return Return.ok(
                DocumentDetail(
                    **info.model_dump(),
                    versions=[DocumentVersionInfo.from_entity(v) for v in versions],
                )
            )
