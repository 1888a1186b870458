"""Exceptions for document store operations."""


class DocumentStoreError(Exception):
    """Base class for document store errors."""


class UnknownCollectionError(DocumentStoreError):
    """Raised when an operation names a collection the store was not configured with.

    Attributes:
        collection (str): The collection name that was requested.
    """

    def __init__(self, collection: str):
        super().__init__(f"Unknown collection '{collection}'.")
        self.collection = collection


class UnknownIndexError(DocumentStoreError):
    """Raised when a query names an index the collection does not declare.

    Attributes:
        collection (str): The collection that was queried.
        index (str): The index name that was requested.
    """

    def __init__(self, collection: str, index: str):
        super().__init__(f"Collection '{collection}' has no index '{index}'.")
        self.collection = collection
        self.index = index


class InvalidDocumentError(DocumentStoreError):
    """Raised when a document cannot be stored as given.

    Covers documents that lack their collection's key field and values the
    backend cannot encode.

    Attributes:
        collection (str): The collection the document was meant for.
        reason (str): Why the document was rejected.
    """

    def __init__(self, collection: str, reason: str):
        super().__init__(f"Invalid document for collection '{collection}': {reason}")
        self.collection = collection
        self.reason = reason


class StoreUnavailableError(DocumentStoreError):
    """Raised when the backing store cannot be reached or fails a request."""
