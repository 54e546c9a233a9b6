"""
Document API Routes

Upload, versioning, download and deletion of documents.
"""

from urllib.parse import quote
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from config import ApplicationConfig
from src.api.error import to_http_error
from src.app.services.authorization import AuthContext
from src.app.services.storage import IStorage
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.documents import (
    DeleteDocumentResponse,
    DeleteDocumentUseCase,
    DocumentDetail,
    DocumentListResponse,
    DownloadDocumentUseCase,
    DownloadResult,
    GetDocumentUseCase,
    ListDocumentsUseCase,
    UploadDocumentUseCase,
    UploadResponse,
    UploadVersionUseCase,
)
from src.depends import get_auth_context, get_storage, get_unit_of_work

router = APIRouter(prefix="/documents", tags=["Documents"])

DEFAULT_CONTENT_TYPE = "application/octet-stream"


async def _read_upload(file: UploadFile) -> bytes:
    # One byte past the limit is enough to reject the upload
    return await file.read(ApplicationConfig.MAX_UPLOAD_BYTES + 1)


def _download_response(download: DownloadResult) -> Response:
    return Response(
        content=download.content,
        media_type=download.content_type,
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(download.filename)}",
            "X-Document-Version": str(download.version),
        },
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UploadResponse)
async def upload_document(
    title: str = Form(..., max_length=255),
    file: UploadFile = File(...),
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IStorage = Depends(get_storage),
):
    """
    Upload Document

    Creates a document owned by the caller, with the file as version 1.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: Missing documents.create
        - 413 Payload Too Large: File exceeds MAX_UPLOAD_BYTES
        - 500 Internal Server Error: Storage failure
    """
    content = await _read_upload(file)

    use_case = UploadDocumentUseCase(uow, storage)
    result = await use_case.execute(
        ctx,
        title=title,
        filename=file.filename or "upload",
        content_type=file.content_type or DEFAULT_CONTENT_TYPE,
        content=content,
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=DocumentListResponse)
async def list_documents(
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Documents

    documents.view_all lists every document, documents.view only the
    caller's own. Deleted documents are never listed.
    """
    use_case = ListDocumentsUseCase(uow)
    result = await use_case.execute(ctx)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/{document_id}", status_code=status.HTTP_200_OK, response_model=DocumentDetail)
async def get_document(
    document_id: UUID,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Document metadata with its version history."""
    use_case = GetDocumentUseCase(uow)
    result = await use_case.execute(ctx, document_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post(
    "/{document_id}/versions",
    status_code=status.HTTP_201_CREATED,
    response_model=UploadResponse,
)
async def upload_version(
    document_id: UUID,
    file: UploadFile = File(...),
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IStorage = Depends(get_storage),
):
    """
    Upload New Version

    Raises:
        - 403 Forbidden: Missing documents.edit (own) / documents.edit_all
        - 404 Not Found: Unknown or deleted document
        - 409 Conflict: Version number still contended after all retries
        - 413 Payload Too Large: File exceeds MAX_UPLOAD_BYTES
    """
    content = await _read_upload(file)

    use_case = UploadVersionUseCase(uow, storage)
    result = await use_case.execute(
        ctx,
        document_id,
        filename=file.filename or "upload",
        content_type=file.content_type or DEFAULT_CONTENT_TYPE,
        content=content,
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/{document_id}/download", status_code=status.HTTP_200_OK)
async def download_document(
    document_id: UUID,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IStorage = Depends(get_storage),
):
    """Download the current version. Every call is audited."""
    use_case = DownloadDocumentUseCase(uow, storage)
    result = await use_case.execute(ctx, document_id)

    if result.is_err():
        raise to_http_error(result.error)

    return _download_response(result.value)


@router.get("/{document_id}/versions/{version}/download", status_code=status.HTTP_200_OK)
async def download_version(
    document_id: UUID,
    version: int,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IStorage = Depends(get_storage),
):
    """Download one specific version, also of a deleted document. Audited."""
    use_case = DownloadDocumentUseCase(uow, storage)
    result = await use_case.execute(ctx, document_id, version=version)

    if result.is_err():
        raise to_http_error(result.error)

    return _download_response(result.value)


@router.delete("/{document_id}", status_code=status.HTTP_200_OK, response_model=DeleteDocumentResponse)
async def delete_document(
    document_id: UUID,
    ctx: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Document

    Soft delete: versions remain downloadable by version number.
    """
    use_case = DeleteDocumentUseCase(uow)
    result = await use_case.execute(ctx, document_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
