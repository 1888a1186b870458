"""Fixtures for DocumentStore contract tests."""

from __future__ import annotations

from collections.abc import Iterable

import pytest

from posbridge.adapters.document_store import (
    InMemoryDocumentStore,
    SqlAlchemyDocumentStore,
)
from posbridge.interfaces.document_store import DocumentStore

from .specs import COLLECTIONS


@pytest.fixture(params=["memory", "sqlite"])
def document_store(
    request: pytest.FixtureRequest, sqlite_engine_memory
) -> Iterable[DocumentStore]:
    """Return a fresh document store for the requested backend.

    Current params:
      - `"memory"` → `InMemoryDocumentStore`
      - `"sqlite"` → `SqlAlchemyDocumentStore` (SQLite in-memory)

    Both serve a ``People`` collection and a ``Pets`` collection with an
    ``owner-index`` on ``ownerId``.
    """
    match request.param:
        case "memory":
            yield InMemoryDocumentStore(COLLECTIONS)
        case "sqlite":
            yield SqlAlchemyDocumentStore(sqlite_engine_memory, COLLECTIONS)
        case _:
            raise ValueError(f"unknown store type: {request.param}")
