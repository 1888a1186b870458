"""Fixtures for IntegrationStore contract tests."""

from __future__ import annotations

from collections.abc import Iterable

import pytest

from posbridge.adapters.document_store import (
    InMemoryDocumentStore,
    SqlAlchemyDocumentStore,
)
from posbridge.service_layer.repositories import (
    IntegrationCollections,
    IntegrationStore,
)
from tests.helpers.time_asserts import FakeClock

# pylint: disable=redefined-outer-name


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clock shared with the store under test."""
    return FakeClock()


@pytest.fixture(params=["memory", "sqlite"])
def integration_store(
    request: pytest.FixtureRequest, sqlite_engine_memory, clock: FakeClock
) -> Iterable[IntegrationStore]:
    """Return an IntegrationStore over a fresh document store.

    Current params:
      - `"memory"` → `InMemoryDocumentStore`
      - `"sqlite"` → `SqlAlchemyDocumentStore` (SQLite in-memory)
    """
    specs = IntegrationCollections().specs()
    match request.param:
        case "memory":
            yield IntegrationStore(InMemoryDocumentStore(specs), clock=clock)
        case "sqlite":
            yield IntegrationStore(
                SqlAlchemyDocumentStore(sqlite_engine_memory, specs), clock=clock
            )
        case _:
            raise ValueError(f"unknown store type: {request.param}")
