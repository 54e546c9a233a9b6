"""
Document Use Cases

Document upload, versioning, download and deletion.
"""

from .upload_document_use_case import UploadDocumentUseCase
from .upload_version_use_case import UploadVersionUseCase
from .download_document_use_case import DownloadDocumentUseCase
from .list_documents_use_case import ListDocumentsUseCase
from .get_document_use_case import GetDocumentUseCase
from .delete_document_use_case import DeleteDocumentUseCase
from .dtos import (
    DeleteDocumentResponse,
    DocumentDetail,
    DocumentInfo,
    DocumentListResponse,
    DocumentVersionInfo,
    DownloadResult,
    UploadResponse,
)

__all__ = [
    # Use Cases
    "UploadDocumentUseCase",
    "UploadVersionUseCase",
    "DownloadDocumentUseCase",
    "ListDocumentsUseCase",
    "GetDocumentUseCase",
    "DeleteDocumentUseCase",
    # DTOs
    "DocumentInfo",
    "DocumentVersionInfo",
    "DocumentDetail",
    "DocumentListResponse",
    "UploadResponse",
    "DeleteDocumentResponse",
    "DownloadResult",
]
