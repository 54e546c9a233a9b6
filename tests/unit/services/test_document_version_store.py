import hashlib
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.app.services.document_version_store import (
    DocumentVersionStore,
    VersionMetadata,
    version_storage_key,
)
from src.app.services.storage import StorageError
from src.domain.base import utcnow
from src.domain.entities import Document, DocumentVersion

CONTENT = b"%PDF-1.4 quarterly numbers"


def make_document(current_version=0, **kwargs):
    return Document(title="Report", owner_id=uuid4(), current_version=current_version, **kwargs)


def make_version(document):
    return DocumentVersion(
        document_id=document.id,
        version=1,
        storage_key=version_storage_key(document.id, 1),
        filename="report.pdf",
        size_bytes=len(CONTENT),
        sha256=hashlib.sha256(CONTENT).hexdigest(),
        created_by=document.owner_id,
    )


@pytest.fixture
def metadata():
    return VersionMetadata(filename="report.pdf", content_type="application/pdf", created_by=uuid4())


@pytest.fixture
def store(mock_uow, mock_storage):
    return DocumentVersionStore(mock_uow, mock_storage, max_attempts=3)


@pytest.mark.asyncio
async def test_creates_next_version(store, mock_uow, mock_storage, metadata):
    # Arrange
    document = make_document(current_version=2)
    mock_uow.documents.get_by_id.return_value = document
    mock_uow.documents.advance_version.return_value = True

    # Act
    result = await store.create_version(document.id, CONTENT, metadata)

    # Assert
    assert result.is_ok()
    version = result.value
    assert version.version == 3
    assert version.storage_key == version_storage_key(document.id, 3)
    assert version.size_bytes == len(CONTENT)
    assert version.sha256 == hashlib.sha256(CONTENT).hexdigest()
    assert version.created_by == metadata.created_by

    mock_uow.documents.advance_version.assert_called_once_with(document.id, 2)
    mock_uow.document_versions.create.assert_called_once_with(version)
    mock_storage.write.assert_called_once_with(version.storage_key, CONTENT, "application/pdf")
    mock_uow.rollback.assert_not_called()


@pytest.mark.asyncio
async def test_lost_compare_and_swap_is_retried(store, mock_uow, metadata):
    # Arrange: a concurrent upload claims version 1 first
    document_id = uuid4()
    mock_uow.documents.get_by_id.side_effect = [
        make_document(current_version=0, id=document_id),
        make_document(current_version=1, id=document_id),
    ]
    mock_uow.documents.advance_version.side_effect = [False, True]

    # Act
    result = await store.create_version(document_id, CONTENT, metadata)

    # Assert
    assert result.value.version == 2
    mock_uow.rollback.assert_called_once()
    assert mock_uow.documents.advance_version.call_count == 2


@pytest.mark.asyncio
async def test_duplicate_version_row_is_retried(store, mock_uow, metadata):
    document_id = uuid4()
    mock_uow.documents.get_by_id.side_effect = [
        make_document(current_version=0, id=document_id),
        make_document(current_version=1, id=document_id),
    ]
    mock_uow.documents.advance_version.return_value = True
    mock_uow.document_versions.create.side_effect = [
        IntegrityError("INSERT INTO document_versions", {}, Exception("unique")),
        None,
    ]

    result = await store.create_version(document_id, CONTENT, metadata)

    assert result.value.version == 2
    mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
async def test_gives_up_after_max_attempts(store, mock_uow, mock_storage, metadata):
    document = make_document()
    mock_uow.documents.get_by_id.return_value = document
    mock_uow.documents.advance_version.return_value = False

    result = await store.create_version(document.id, CONTENT, metadata)

    assert result.is_err()
    assert result.error.code == "VERSION_CONFLICT"
    assert mock_uow.documents.advance_version.call_count == 3
    assert mock_uow.rollback.call_count == 3
    mock_storage.write.assert_not_called()


@pytest.mark.asyncio
async def test_missing_document(store, mock_uow, metadata):
    mock_uow.documents.get_by_id.return_value = None

    result = await store.create_version(uuid4(), CONTENT, metadata)

    assert result.error.code == "DOCUMENT_NOT_FOUND"
    mock_uow.documents.advance_version.assert_not_called()


@pytest.mark.asyncio
async def test_deleted_document(store, mock_uow, metadata):
    document = make_document(current_version=1, deleted_at=utcnow())
    mock_uow.documents.get_by_id.return_value = document

    result = await store.create_version(document.id, CONTENT, metadata)

    assert result.error.code == "DOCUMENT_NOT_FOUND"


@pytest.mark.asyncio
async def test_storage_failure(store, mock_uow, mock_storage, metadata):
    document = make_document()
    mock_uow.documents.get_by_id.return_value = document
    mock_uow.documents.advance_version.return_value = True
    mock_storage.write.side_effect = StorageError("disk full")

    result = await store.create_version(document.id, CONTENT, metadata)

    assert result.is_err()
    assert result.error.code == "STORAGE_FAILURE"
    mock_uow.commit.assert_not_called()
    # Whatever the failed write left is removed, so the number can be claimed again
    mock_storage.delete.assert_awaited_once_with(version_storage_key(document.id, 1))


@pytest.mark.asyncio
async def test_storage_failure_logs_key_only(store, mock_uow, mock_storage, metadata, caplog):
    document = make_document()
    mock_uow.documents.get_by_id.return_value = document
    mock_uow.documents.advance_version.return_value = True
    mock_storage.write.side_effect = StorageError("disk full")
    mock_storage.write.side_effect.__cause__ = OSError(28, "No space left", "/srv/storage/x")

    with caplog.at_level("ERROR"):
        await store.create_version(document.id, CONTENT, metadata)

    assert version_storage_key(document.id, 1) in caplog.text
    assert all(record.exc_info is None for record in caplog.records)
    assert "/srv/storage" not in caplog.text


@pytest.mark.asyncio
async def test_read_content_failure(store, mock_storage):
    document = make_document()
    mock_storage.read.side_effect = StorageError("gone")
    version = make_version(document)

    result = await store.read_content(version)

    assert result.error.code == "STORAGE_FAILURE"


@pytest.mark.asyncio
async def test_pending_content_discards_on_failure(store, mock_storage):
    version = make_version(make_document())

    with pytest.raises(RuntimeError):
        async with store.pending_content(version):
            raise RuntimeError("commit failed")

    mock_storage.delete.assert_called_once_with(version.storage_key)


@pytest.mark.asyncio
async def test_pending_content_keeps_content_on_success(store, mock_storage):
    version = make_version(make_document())

    async with store.pending_content(version):
        pass

    mock_storage.delete.assert_not_called()
