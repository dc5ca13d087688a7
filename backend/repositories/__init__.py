"""Document-store backed repository implementations."""

from .application_repository import DocumentApplicationRepository
from .document_store import MemoryDocumentStore, build_document_store
from .fraud_lookup_repository import DocumentFraudLookupRepository
from .user_repository import DocumentUserRepository

__all__ = [
    "DocumentApplicationRepository",
    "DocumentFraudLookupRepository",
    "DocumentUserRepository",
    "MemoryDocumentStore",
    "build_document_store",
]
