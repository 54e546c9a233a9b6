"""
Document Version Store

Version numbers are claimed with a compare-and-swap on
documents.current_version, and backed by the unique (document_id, version)
index. Losing either one means a concurrent upload got the number first: the
attempt is rolled back and retried against a fresh read.

A retry rolls back the whole transaction. Callers either call create_version
before any other write, or write only rows nobody else can contend on (a
document created in the same transaction cannot lose the race for version 1).

Content is written before the transaction commits. Callers wrap their
remaining writes and the commit in pending_content(), which removes the file
again if they fail, so a version number that gets reclaimed never finds a
stale file in its place.
"""

import hashlib
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.errors import DOCUMENT_NOT_FOUND, STORAGE_FAILURE, VERSION_CONFLICT
from src.app.services.storage import IStorage, StorageError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import DocumentVersion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionMetadata:
    filename: str
    content_type: str
    created_by: UUID


def version_storage_key(document_id: UUID, version: int) -> str:
    return f"documents/{document_id}/v{version}"


class DocumentVersionStore:
    def __init__(
        self, uow: UnitOfWork, storage: IStorage, max_attempts: Optional[int] = None
    ):
        self.uow = uow
        self.storage = storage
        self.max_attempts = max_attempts or ApplicationConfig.VERSION_CONFLICT_RETRIES

    async def create_version(
        self, document_id: UUID, content: bytes, metadata: VersionMetadata
    ) -> Result[DocumentVersion]:
        """
        Append the next version of a document.

        Claims the number, inserts the version row and writes the content, all
        inside the caller's transaction. The caller commits.
        """
        for attempt in range(1, self.max_attempts + 1):
            document = await self.uow.documents.get_by_id(document_id)
            if document is None or document.deleted_at is not None:
                return Return.err(Error(DOCUMENT_NOT_FOUND, "Document not found"))

            current = document.current_version
            next_version = current + 1

            claimed = await self.uow.documents.advance_version(document_id, current)
            if not claimed:
                logger.info(
                    "Version %d of document %s taken, retrying (attempt %d)",
                    next_version,
                    document_id,
                    attempt,
                )
                await self.uow.rollback()
                continue

            version = DocumentVersion(
                document_id=document_id,
                version=next_version,
                storage_key=version_storage_key(document_id, next_version),
                filename=metadata.filename,
                content_type=metadata.content_type,
                size_bytes=len(content),
                sha256=hashlib.sha256(content).hexdigest(),
                created_by=metadata.created_by,
            )
            try:
                await self.uow.document_versions.create(version)
            except IntegrityError:
                logger.info(
                    "Duplicate version %d for document %s, retrying (attempt %d)",
                    next_version,
                    document_id,
                    attempt,
                )
                await self.uow.rollback()
                continue

            try:
                await self.storage.write(version.storage_key, content, metadata.content_type)
            except StorageError:
                # The number is reclaimed after rollback, so its path must be free
                logger.error("Failed to store %s", version.storage_key)
                await self.discard_content(version)
                return Return.err(Error(STORAGE_FAILURE, "Document storage is unavailable"))

            return Return.ok(version)

        logger.warning(
            "Gave up creating a version of document %s after %d attempts",
            document_id,
            self.max_attempts,
        )
        return Return.err(
            Error(VERSION_CONFLICT, "Document was modified concurrently, please retry")
        )

    async def get_version(self, document_id: UUID, version: int) -> Optional[DocumentVersion]:
        return await self.uow.document_versions.get(document_id, version)

    async def read_content(self, version: DocumentVersion) -> Result[bytes]:
        try:
            return Return.ok(await self.storage.read(version.storage_key))
        except StorageError:
            logger.error("Failed to read %s", version.storage_key)
            return Return.err(Error(STORAGE_FAILURE, "Document storage is unavailable"))

    async def discard_content(self, version: DocumentVersion) -> None:
        """Remove the file of a version whose transaction did not commit."""
        try:
            await self.storage.delete(version.storage_key)
        except StorageError:
            logger.error("Failed to discard %s", version.storage_key)

    @asynccontextmanager
    async def pending_content(self, version: DocumentVersion) -> AsyncIterator[None]:
        """Discard the version's content if the enclosed block raises."""
        try:
            yield
        except BaseException:
            await self.discard_content(version)
            raise
