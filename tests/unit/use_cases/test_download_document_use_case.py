from uuid import uuid4

import pytest

from src.app.use_cases.documents import (
    DeleteDocumentUseCase,
    DownloadDocumentUseCase,
    GetDocumentUseCase,
    ListDocumentsUseCase,
)
from src.domain.base import utcnow
from src.domain.entities import AuditAction, Document, DocumentVersion

CONTENT = b"%PDF-1.4 quarterly numbers"


def make_version(document, number):
    return DocumentVersion(
        document_id=document.id,
        version=number,
        storage_key=f"documents/{document.id}/v{number}",
        filename=f"report-v{number}.pdf",
        content_type="application/pdf",
        size_bytes=len(CONTENT),
        sha256="0" * 64,
        created_by=document.owner_id,
    )


@pytest.fixture
def owned(make_ctx):
    """Caller with documents.view and a two-version document they own."""
    ctx = make_ctx("documents.view", "documents.delete")
    document = Document(title="Report", owner_id=ctx.user_id, current_version=2)
    return ctx, document


@pytest.mark.asyncio
async def test_download_current_version(mock_uow, mock_storage, owned):
    # Arrange
    ctx, document = owned
    mock_uow.documents.get_by_id.return_value = document
    mock_uow.document_versions.get.return_value = make_version(document, 2)
    mock_storage.read.return_value = CONTENT

    # Act
    result = await DownloadDocumentUseCase(mock_uow, mock_storage).execute(ctx, document.id)

    # Assert
    assert result.is_ok()
    assert result.value.content == CONTENT
    assert result.value.version == 2
    assert result.value.filename == "report-v2.pdf"
    mock_uow.document_versions.get.assert_called_once_with(document.id, 2)

    entry = mock_uow.audit_logs.create.call_args.args[0]
    assert entry.action == AuditAction.ACCESS
    assert entry.user_id == ctx.user_id
    assert entry.event_metadata == {"version": 2}
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_download_specific_version_of_deleted_document(mock_uow, mock_storage, owned):
    ctx, document = owned
    document.deleted_at = utcnow()
    mock_uow.documents.get_by_id.return_value = document
    mock_uow.document_versions.get.return_value = make_version(document, 1)
    mock_storage.read.return_value = CONTENT

    result = await DownloadDocumentUseCase(mock_uow, mock_storage).execute(ctx, document.id, 1)

    assert result.is_ok()
    assert result.value.version == 1


@pytest.mark.asyncio
async def test_download_current_version_of_deleted_document(mock_uow, mock_storage, owned):
    ctx, document = owned
    document.deleted_at = utcnow()
    mock_uow.documents.get_by_id.return_value = document

    result = await DownloadDocumentUseCase(mock_uow, mock_storage).execute(ctx, document.id)

    assert result.error.code == "DOCUMENT_NOT_FOUND"
    mock_uow.audit_logs.create.assert_not_called()


@pytest.mark.asyncio
async def test_download_unknown_version(mock_uow, mock_storage, owned):
    ctx, document = owned
    mock_uow.documents.get_by_id.return_value = document
    mock_uow.document_versions.get.return_value = None

    result = await DownloadDocumentUseCase(mock_uow, mock_storage).execute(ctx, document.id, 9)

    assert result.error.code == "VERSION_NOT_FOUND"
    mock_uow.audit_logs.create.assert_not_called()


@pytest.mark.asyncio
async def test_download_foreign_document_is_denied_without_audit(mock_uow, mock_storage, make_ctx):
    ctx = make_ctx("documents.view")
    document = Document(title="Report", owner_id=uuid4(), current_version=1)
    mock_uow.documents.get_by_id.return_value = document

    result = await DownloadDocumentUseCase(mock_uow, mock_storage).execute(ctx, document.id)

    assert result.error.code == "MISSING_PERMISSION"
    assert result.error.message == "Missing permission: documents.view_all"
    mock_storage.read.assert_not_called()
    mock_uow.audit_logs.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_download_foreign_document_with_view_all(mock_uow, mock_storage, make_ctx):
    ctx = make_ctx("documents.view_all")
    document = Document(title="Report", owner_id=uuid4(), current_version=1)
    mock_uow.documents.get_by_id.return_value = document
    mock_uow.document_versions.get.return_value = make_version(document, 1)
    mock_storage.read.return_value = CONTENT

    result = await DownloadDocumentUseCase(mock_uow, mock_storage).execute(ctx, document.id)

    assert result.is_ok()


@pytest.mark.asyncio
async def test_list_scopes_to_owner(mock_uow, owned):
    ctx, document = owned
    mock_uow.documents.list_active.return_value = [document]

    result = await ListDocumentsUseCase(mock_uow).execute(ctx)

    assert [d.id for d in result.value.documents] == [str(document.id)]
    mock_uow.documents.list_active.assert_called_once_with(owner_id=ctx.user_id)


@pytest.mark.asyncio
async def test_list_everything_with_view_all(mock_uow, make_ctx):
    mock_uow.documents.list_active.return_value = []

    result = await ListDocumentsUseCase(mock_uow).execute(make_ctx("documents.view_all"))

    assert result.value.documents == []
    mock_uow.documents.list_active.assert_called_once_with(owner_id=None)


@pytest.mark.asyncio
async def test_list_without_permission(mock_uow, make_ctx):
    result = await ListDocumentsUseCase(mock_uow).execute(make_ctx("users.view"))

    assert result.error.message == "Missing permission: documents.view"
    mock_uow.documents.list_active.assert_not_called()


@pytest.mark.asyncio
async def test_get_document_with_versions(mock_uow, owned):
    ctx, document = owned
    mock_uow.documents.get_by_id.return_value = document
    mock_uow.document_versions.list_by_document.return_value = [
        make_version(document, 1),
        make_version(document, 2),
    ]

    result = await GetDocumentUseCase(mock_uow).execute(ctx, document.id)

    assert result.value.title == "Report"
    assert [v.version for v in result.value.versions] == [1, 2]
    mock_uow.audit_logs.create.assert_not_called()


@pytest.mark.asyncio
async def test_delete_is_soft(mock_uow, owned):
    # Arrange
    ctx, document = owned
    mock_uow.documents.get_by_id.return_value = document

    # Act
    result = await DeleteDocumentUseCase(mock_uow).execute(ctx, document.id)

    # Assert
    assert result.is_ok()
    assert document.deleted_at is not None
    assert result.value.deleted_at == document.deleted_at
    mock_uow.documents.update.assert_called_once_with(document)
    entry = mock_uow.audit_logs.create.call_args.args[0]
    assert entry.action == AuditAction.DELETE
    assert entry.event_metadata == {"title": "Report", "current_version": 2}
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_delete_twice(mock_uow, owned):
    ctx, document = owned
    document.deleted_at = utcnow()
    mock_uow.documents.get_by_id.return_value = document

    result = await DeleteDocumentUseCase(mock_uow).execute(ctx, document.id)

    assert result.error.code == "DOCUMENT_NOT_FOUND"


@pytest.mark.asyncio
async def test_delete_with_view_only_is_denied(mock_uow, make_ctx):
    ctx = make_ctx("documents.view", "documents.upload")
    document = Document(title="Report", owner_id=ctx.user_id, current_version=1)
    mock_uow.documents.get_by_id.return_value = document

    result = await DeleteDocumentUseCase(mock_uow).execute(ctx, document.id)

    assert result.error.message == "Missing permission: documents.delete"
    assert document.deleted_at is None
    mock_uow.documents.get_by_id.assert_not_called()
    mock_uow.audit_logs.create.assert_not_called()
