"""
Document Use Case DTOs (Data Transfer Objects)

Responses for document and version operations.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from src.app.use_cases.base_dto import ApiModel
from src.domain.entities import Document, DocumentVersion


class DocumentVersionInfo(ApiModel):
    """One stored version of a document"""

    version: int
    filename: str
    content_type: str
    size_bytes: int
    sha256: str
    created_by: str
    created_at: datetime

    @classmethod
    def from_entity(cls, version: DocumentVersion) -> "DocumentVersionInfo":
        return cls(
            version=version.version,
            filename=version.filename,
            content_type=version.content_type,
            size_bytes=version.size_bytes,
            sha256=version.sha256,
            created_by=str(version.created_by),
            created_at=version.created_at,
        )


class DocumentInfo(ApiModel):
    """Document metadata"""

    id: str
    title: str
    owner_id: str
    current_version: int
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, document: Document) -> "DocumentInfo":
        return cls(
            id=str(document.id),
            title=document.title,
            owner_id=str(document.owner_id),
            current_version=document.current_version,
            created_at=document.created_at,
            updated_at=document.updated_at,
            deleted_at=document.deleted_at,
        )


class DocumentDetail(DocumentInfo):
    """Document metadata with its version history, oldest first"""

    versions: List[DocumentVersionInfo]


class DocumentListResponse(ApiModel):
    documents: List[DocumentInfo]


class UploadResponse(ApiModel):
    """Response for document upload and new version upload"""

    document: DocumentInfo
    version: DocumentVersionInfo


class DeleteDocumentResponse(ApiModel):
    id: str
    deleted_at: datetime


@dataclass(frozen=True)
class DownloadResult:
    """Content of one version, ready to be streamed back"""

    content: bytes
    filename: str
    content_type: str
    version: int
