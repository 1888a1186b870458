"""Build the integration store from configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from posbridge import config
from posbridge.adapters.db.engine import make_engine
from posbridge.adapters.document_store import (
    DynamoDBDocumentStore,
    InMemoryDocumentStore,
    SqlAlchemyDocumentStore,
)
from posbridge.adapters.id_generators import ULIDGenerator
from posbridge.interfaces.document_store import DocumentStore
from posbridge.interfaces.id_generator import IdGenerator
from posbridge.service_layer.repositories import IntegrationCollections, IntegrationStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """Wired application services handed to entry points."""

    integration_store: IntegrationStore
    id_generator: IdGenerator = field(default_factory=ULIDGenerator)


def build_collections() -> IntegrationCollections:
    """Collection names from configuration."""
    integrations, configs = config.get_table_names()
    return IntegrationCollections(integrations=integrations, configs=configs)


def build_document_store(
    backend: config.Backend, collections: IntegrationCollections
) -> DocumentStore:
    """Build the document store adapter for ``backend``.

    Raises:
        DatabaseUrlNotSetError: If the ``sql`` backend is chosen without a DB URL.
    """
    specs = collections.specs()
    match backend:
        case config.Backend.MEMORY:
            return InMemoryDocumentStore(specs)
        case config.Backend.SQL:
            return SqlAlchemyDocumentStore(make_engine(config.get_db_url()), specs)
        case config.Backend.DYNAMODB:
            return DynamoDBDocumentStore.from_region(
                specs,
                region=config.get_aws_region(),
                endpoint_url=config.get_dynamodb_endpoint(),
            )
    # Unreachable while every Backend member is matched above.
    raise config.UnsupportedBackendError(str(backend))  # pragma: no cover


def bootstrap() -> AppContainer:
    """Wire the integration store for the configured backend."""
    backend = config.get_backend()
    collections = build_collections()
    logger.debug(
        "Bootstrapping %s backend (collections: %s, %s)",
        backend.value,
        collections.integrations,
        collections.configs,
    )
    store = build_document_store(backend, collections)
    return AppContainer(
        integration_store=IntegrationStore(store, collections=collections)
    )
