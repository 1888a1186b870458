"""Document store interface package."""

from .document_store import CollectionSpec, Document, DocumentStore
from .errors import (
    DocumentStoreError,
    InvalidDocumentError,
    StoreUnavailableError,
    UnknownCollectionError,
    UnknownIndexError,
)

__all__ = [
    "CollectionSpec",
    "Document",
    "DocumentStore",
    "DocumentStoreError",
    "InvalidDocumentError",
    "StoreUnavailableError",
    "UnknownCollectionError",
    "UnknownIndexError",
]
