"""In-memory implementation of the DocumentStore interface."""

from __future__ import annotations

import copy
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from posbridge.interfaces.document_store import (
    CollectionSpec,
    Document,
    DocumentStore,
)

from .base import CollectionRegistry


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed DocumentStore.

    Intended for tests, demos and the ``memory`` backend; nothing is persisted.
    Documents are deep-copied on the way in and out so callers never share
    mutable state with the store. A single lock serializes all operations, so
    one instance may be shared across threads.
    """

    def __init__(self, collections: Iterable[CollectionSpec]) -> None:
        self._registry = CollectionRegistry(collections)
        self._lock = threading.Lock()
        # collection name -> primary key -> document
        self._data: dict[str, dict[str, Document]] = {
            spec.name: {} for spec in self._registry
        }

    # --- writes ---

    def put(self, collection: str, document: Mapping[str, Any]) -> None:
        key = self._registry.key_of(collection, document)
        stored = copy.deepcopy(dict(document))
        with self._lock:
            self._data[collection][key] = stored

    def delete(self, collection: str, key: str) -> None:
        self._registry.spec(collection)
        with self._lock:
            self._data[collection].pop(key, None)

    # --- reads ---

    def get(self, collection: str, key: str) -> Document | None:
        self._registry.spec(collection)
        with self._lock:
            document = self._data[collection].get(key)
            return copy.deepcopy(document) if document is not None else None

    def query(self, collection: str, index: str, index_key: str) -> list[Document]:
        field_name = self._registry.index_field(collection, index)
        return self._matching(collection, field_name, index_key)

    def scan(self, collection: str, field_name: str, value: str) -> list[Document]:
        self._registry.spec(collection)
        return self._matching(collection, field_name, value)

    def _matching(self, collection: str, field_name: str, value: str) -> list[Document]:
        with self._lock:
            return [
                copy.deepcopy(document)
                for _, document in sorted(self._data[collection].items())
                if document.get(field_name) == value
            ]
