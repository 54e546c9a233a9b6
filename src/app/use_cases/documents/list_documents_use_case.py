"""
List Documents Use Case
"""

from libs.result import Result, Return
from src.app.services.authorization import AuthContext, owner_scope
from src.app.services.unit_of_work import UnitOfWork
from .dtos import DocumentInfo, DocumentListResponse


class ListDocumentsUseCase:
    """
    Use case for listing documents.

    Business Rules:
    - documents.view_all lists every document
    - documents.view lists only the caller's own documents
    - Soft-deleted documents are never listed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: AuthContext) -> Result[DocumentListResponse]:
        scope = owner_scope(ctx, "documents.view")
        if scope.is_err():
            return scope

        async with self.uow:
            documents = await self.uow.documents.list_active(owner_id=scope.value)
            return Return.ok(
                DocumentListResponse(
                    documents=[DocumentInfo.from_entity(d) for d in documents]
                )
            )
