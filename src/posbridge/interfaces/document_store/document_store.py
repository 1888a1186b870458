"""Interface for a key/value document store with secondary indexes.

Defines the `DocumentStore` abstraction the integration store is built on:
single-key upsert/get/delete, equality queries over declared secondary
indexes, and full-collection equality scans. Stores serialize individual
single-key operations but offer no multi-key transactions.
"""

from __future__ import annotations

import abc
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

Document: TypeAlias = dict[str, Any]


@dataclass(frozen=True)
class CollectionSpec:
    """Describes one collection: its name, key field and secondary indexes.

    Attributes:
        name: Collection (table) name, e.g. ``"Integrations"``.
        key_field: Document field holding the primary key.
        indexes: Index name → indexed field, e.g.
            ``{"integrationId-index": "integrationId"}``.
    """

    name: str
    key_field: str
    indexes: Mapping[str, str] = field(default_factory=dict)

    def key_of(self, document: Mapping[str, Any]) -> str | None:
        """Return the document's primary key, or None if it has none."""
        key = document.get(self.key_field)
        if not isinstance(key, str) or not key:
            return None
        return key


class DocumentStore(abc.ABC):
    """Document store port: single-key CRUD plus index queries and scans."""

    @abc.abstractmethod
    def put(self, collection: str, document: Mapping[str, Any]) -> None:
        """Upsert a document by its primary key.

        Re-putting an existing key silently replaces the stored document.

        Args:
            collection: Name of the target collection.
            document: The document to store. Must carry the collection's key field.

        Raises:
            UnknownCollectionError: If the collection is not configured.
            InvalidDocumentError: If the key field is missing or the document
                cannot be encoded.
            StoreUnavailableError: If the backend fails the request.
        """

    @abc.abstractmethod
    def get(self, collection: str, key: str) -> Document | None:
        """Fetch a document by primary key.

        Args:
            collection: Name of the collection.
            key: Primary key value.

        Returns:
            Document | None: The stored document, or ``None`` when absent.

        Raises:
            UnknownCollectionError: If the collection is not configured.
            StoreUnavailableError: If the backend fails the request.
        """

    @abc.abstractmethod
    def query(self, collection: str, index: str, index_key: str) -> list[Document]:
        """Fetch every document whose indexed field equals ``index_key``.

        Args:
            collection: Name of the collection.
            index: Name of a secondary index declared on the collection.
            index_key: Value to match.

        Returns:
            list[Document]: Matching documents; empty when nothing matches.

        Raises:
            UnknownCollectionError: If the collection is not configured.
            UnknownIndexError: If the index is not declared on the collection.
            StoreUnavailableError: If the backend fails the request.
        """

    @abc.abstractmethod
    def scan(self, collection: str, field_name: str, value: str) -> list[Document]:
        """Walk the whole collection and return documents with ``field_name == value``.

        Cost is proportional to the collection size.

        Args:
            collection: Name of the collection.
            field_name: Document field to compare.
            value: Value to match.

        Returns:
            list[Document]: Matching documents; empty when nothing matches.

        Raises:
            UnknownCollectionError: If the collection is not configured.
            StoreUnavailableError: If the backend fails the request.
        """

    @abc.abstractmethod
    def delete(self, collection: str, key: str) -> None:
        """Delete a document by primary key.

        Deleting an absent key succeeds.

        Raises:
            UnknownCollectionError: If the collection is not configured.
            StoreUnavailableError: If the backend fails the request.
        """
