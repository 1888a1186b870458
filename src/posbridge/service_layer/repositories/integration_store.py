"""Integration record store.

Manages two collections on top of a `DocumentStore`:

- ``Integrations``: one document per integration, keyed by ``integrationId``.
- ``IntegrationConfigs``: one document per config, keyed by
  ``integrationConfigId``, with a secondary index on ``integrationId``.

The document store has no multi-document transactions, so consistency
between the two collections rests on ordering alone:

- a config is written only after its integration has been seen to exist;
- an integration is deleted only after all of its configs are gone.

Both are check-then-act. Two callers mutating the same integration
concurrently can still interleave between the check and the write.
Every delete is idempotent, so a failed cascade converges when retried.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from posbridge.domain.integration import (
    INTEGRATION_CONFIG_ID,
    INTEGRATION_ID,
    POS_ID,
    DocumentMappingError,
    Integration,
    IntegrationConfig,
    utc_now,
)
from posbridge.interfaces.document_store import (
    CollectionSpec,
    DocumentStore,
    DocumentStoreError,
)

from .errors import NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

INTEGRATION_KIND = "Integration"


@dataclass(frozen=True)
class IntegrationCollections:
    """Names of the collections and index the store works with."""

    integrations: str = "Integrations"
    configs: str = "IntegrationConfigs"
    configs_by_integration: str = "integrationId-index"

    def specs(self) -> tuple[CollectionSpec, CollectionSpec]:
        """Collection specs to configure a document store adapter with."""
        return (
            CollectionSpec(self.integrations, INTEGRATION_ID),
            CollectionSpec(
                self.configs,
                INTEGRATION_CONFIG_ID,
                {self.configs_by_integration: INTEGRATION_ID},
            ),
        )


class IntegrationStore:
    """Repository for integrations and their configs.

    Stateless apart from the shared document store handle; safe to share
    between threads when the document store is.

    Args:
        document_store: The backing store (must serve both collections).
        collections: Collection and index names. Defaults to
            ``Integrations`` / ``IntegrationConfigs`` / ``integrationId-index``.
        clock: Returns the current aware UTC datetime.
    """

    def __init__(
        self,
        document_store: DocumentStore,
        *,
        collections: IntegrationCollections | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = document_store
        self.collections = collections if collections is not None else IntegrationCollections()
        self._clock = clock

    # --------------------------------------------------------------------- #
    # Integrations
    # --------------------------------------------------------------------- #

    def save_integration(self, integration: Integration) -> None:
        """Write an integration, replacing any stored record with the same ID.

        Fills in ``created_at`` and ``last_sync`` on the given object when they
        are unset; timestamps the caller already set are kept. Configs are
        never written.

        Raises:
            ValidationError: If ``integration_id`` is empty.
            PersistenceError: If the write fails.
        """
        operation = "save_integration"
        if not integration.integration_id:
            raise ValidationError(operation, "integration_id")

        now = self._clock()
        if integration.created_at is None:
            integration.created_at = now
        if integration.last_sync is None:
            integration.last_sync = now

        self._put(
            operation,
            integration.integration_id,
            self.collections.integrations,
            integration.to_document(),
        )
        logger.debug("Saved integration %s", integration.integration_id)

    def get_integration_by_id(self, integration_id: str) -> Integration:
        """Fetch an integration with its configs attached.

        Raises:
            NotFoundError: If no integration has this ID.
            PersistenceError: If the read fails, the record cannot be decoded,
                or its configs cannot be loaded.
        """
        operation = "get_integration_by_id"
        try:
            document = self._store.get(self.collections.integrations, integration_id)
        except DocumentStoreError as e:
            raise PersistenceError(
                operation, integration_id, "error reading integration", e
            ) from e

        if document is None:
            raise NotFoundError(operation, INTEGRATION_KIND, integration_id)

        integration = self._decode_integration(operation, integration_id, document)
        self._hydrate(operation, integration)
        return integration

    def get_integrations_by_pos_id(self, pos_id: str) -> list[Integration]:
        """Return every integration of a point-of-sale tenant, configs attached.

        This walks the whole integrations collection. An empty list means the
        tenant has no integrations.

        Raises:
            PersistenceError: If the scan fails, or any single record cannot be
                decoded or hydrated. No partial result is returned.
        """
        operation = "get_integrations_by_pos_id"
        try:
            documents = self._store.scan(self.collections.integrations, POS_ID, pos_id)
        except DocumentStoreError as e:
            raise PersistenceError(
                operation, pos_id, "error scanning integrations", e
            ) from e

        integrations = [
            self._decode_integration(operation, pos_id, document)
            for document in documents
        ]
        for integration in integrations:
            self._hydrate(operation, integration)
        logger.debug("Found %d integration(s) for POS %s", len(integrations), pos_id)
        return integrations

    def update_integration(self, integration: Integration) -> None:
        """Overwrite an existing integration and refresh its ``last_sync``.

        This is a full replacement, not a patch. A record built without
        ``created_at`` gets a fresh one on the write, so pass the record that
        was read back to keep the original creation time.

        Raises:
            ValidationError: If ``integration_id`` is empty.
            NotFoundError: If the integration does not exist.
            PersistenceError: If the existence check or the write fails.
        """
        operation = "update_integration"
        integration_id = integration.integration_id
        if not integration_id:
            raise ValidationError(operation, "integration_id")

        try:
            self.get_integration_by_id(integration_id)
        except NotFoundError as e:
            raise NotFoundError(operation, INTEGRATION_KIND, integration_id) from e
        except PersistenceError as e:
            raise PersistenceError(
                operation, integration_id, "error checking integration exists", e
            ) from e

        integration.last_sync = self._clock()
        try:
            self.save_integration(integration)
        except PersistenceError as e:
            raise PersistenceError(
                operation, integration_id, "error saving integration", e
            ) from e

    def delete_integration(self, integration_id: str) -> None:
        """Delete an integration and, first, all of its configs.

        Deleting an ID that does not exist succeeds. If the config cascade
        fails partway, the integration itself is left in place and the
        configs already removed stay removed; calling this again is safe.

        Raises:
            PersistenceError: If a config or the integration cannot be deleted.
        """
        operation = "delete_integration"
        try:
            self.delete_integration_configs(integration_id)
        except PersistenceError as e:
            raise PersistenceError(
                operation, integration_id, "error deleting integration configs", e
            ) from e

        try:
            self._store.delete(self.collections.integrations, integration_id)
        except DocumentStoreError as e:
            raise PersistenceError(
                operation, integration_id, "error deleting integration", e
            ) from e
        logger.info("Deleted integration %s", integration_id)

    # --------------------------------------------------------------------- #
    # Configs
    # --------------------------------------------------------------------- #

    def save_integration_config(self, config: IntegrationConfig) -> None:
        """Write a config after checking its integration exists.

        Replaces any stored config with the same ID.

        Raises:
            ValidationError: If ``integration_config_id`` or ``integration_id``
                is empty (checked in that order).
            NotFoundError: If the referenced integration does not exist.
                Nothing is written.
            PersistenceError: If the existence check or the write fails.
        """
        operation = "save_integration_config"
        config_id = config.integration_config_id
        if not config_id:
            raise ValidationError(operation, "integration_config_id")
        if not config.integration_id:
            raise ValidationError(operation, "integration_id", config_id)

        # loads the parent's configs too; only existence matters here
        try:
            self.get_integration_by_id(config.integration_id)
        except NotFoundError as e:
            raise NotFoundError(operation, INTEGRATION_KIND, config.integration_id) from e
        except PersistenceError as e:
            raise PersistenceError(
                operation, config_id, "error checking parent integration", e
            ) from e

        self._put(operation, config_id, self.collections.configs, config.to_document())
        logger.debug(
            "Saved config %s for integration %s", config_id, config.integration_id
        )

    def get_integration_configs(self, integration_id: str) -> list[IntegrationConfig]:
        """Return the configs of an integration via the secondary index.

        An empty list means there are none; it is not an error.

        Raises:
            PersistenceError: If the query fails or a config cannot be decoded.
        """
        operation = "get_integration_configs"
        try:
            documents = self._store.query(
                self.collections.configs,
                self.collections.configs_by_integration,
                integration_id,
            )
        except DocumentStoreError as e:
            raise PersistenceError(
                operation, integration_id, "error querying configs", e
            ) from e

        try:
            return [IntegrationConfig.from_document(document) for document in documents]
        except DocumentMappingError as e:
            raise PersistenceError(
                operation, integration_id, "error decoding configs", e
            ) from e

    def delete_integration_configs(self, integration_id: str) -> None:
        """Delete every config of an integration, one by one.

        Stops at the first failed delete. Configs deleted before the failure
        stay deleted; the rest are left untouched.

        Raises:
            PersistenceError: If the configs cannot be listed or one cannot be deleted.
        """
        operation = "delete_integration_configs"
        try:
            configs = self.get_integration_configs(integration_id)
        except PersistenceError as e:
            raise PersistenceError(
                operation, integration_id, "error getting configs to delete", e
            ) from e

        for deleted, config in enumerate(configs):
            try:
                self._store.delete(self.collections.configs, config.integration_config_id)
            except DocumentStoreError as e:
                logger.warning(
                    "Config cascade for integration %s stopped at %s: "
                    "%d deleted, %d remaining",
                    integration_id,
                    config.integration_config_id,
                    deleted,
                    len(configs) - deleted,
                )
                raise PersistenceError(
                    operation,
                    integration_id,
                    f"error deleting config {config.integration_config_id}",
                    e,
                ) from e

        if configs:
            logger.info(
                "Deleted %d config(s) of integration %s", len(configs), integration_id
            )

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _put(
        self, operation: str, entity_id: str, collection: str, document: dict[str, Any]
    ) -> None:
        try:
            self._store.put(collection, document)
        except DocumentStoreError as e:
            raise PersistenceError(
                operation, entity_id, f"error writing to {collection}", e
            ) from e

    @staticmethod
    def _decode_integration(
        operation: str, entity_id: str, document: dict[str, Any]
    ) -> Integration:
        try:
            return Integration.from_document(document)
        except DocumentMappingError as e:
            raise PersistenceError(
                operation, entity_id, "error decoding integration", e
            ) from e

    def _hydrate(self, operation: str, integration: Integration) -> None:
        """Attach the integration's current configs, or fail the whole read."""
        try:
            configs = self.get_integration_configs(integration.integration_id)
        except PersistenceError as e:
            raise PersistenceError(
                operation,
                integration.integration_id,
                "error getting integration configs",
                e,
            ) from e
        integration.attach_configs(configs)
