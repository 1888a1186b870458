"""Shared collection bookkeeping for document store adapters."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from posbridge.interfaces.document_store import (
    CollectionSpec,
    InvalidDocumentError,
    UnknownCollectionError,
    UnknownIndexError,
)


class CollectionRegistry:
    """Resolves collection names to their `CollectionSpec`.

    Adapters are configured with the collections they serve; anything else is
    rejected with `UnknownCollectionError` before touching the backend.
    """

    def __init__(self, collections: Iterable[CollectionSpec]) -> None:
        self._specs = {spec.name: spec for spec in collections}

    def __iter__(self):
        return iter(self._specs.values())

    def spec(self, collection: str) -> CollectionSpec:
        """Return the spec for ``collection``."""
        if (spec := self._specs.get(collection)) is None:
            raise UnknownCollectionError(collection)
        return spec

    def index_field(self, collection: str, index: str) -> str:
        """Return the field indexed by ``index`` on ``collection``."""
        spec = self.spec(collection)
        if (field_name := spec.indexes.get(index)) is None:
            raise UnknownIndexError(collection, index)
        return field_name

    def key_of(self, collection: str, document: Mapping[str, Any]) -> str:
        """Return the primary key of a document about to be written."""
        spec = self.spec(collection)
        if (key := spec.key_of(document)) is None:
            raise InvalidDocumentError(
                collection, f"missing key field '{spec.key_field}'"
            )
        return key
