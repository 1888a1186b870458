"""Fixtures for end-to-end CLI tests."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from posbridge import config
from posbridge.adapters.document_store import InMemoryDocumentStore
from posbridge.adapters.id_generators import SimpleIdGenerator
from posbridge.bootstrap import AppContainer
from posbridge.entrypoints.cli import integrations as integrations_cli
from posbridge.service_layer.repositories import (
    IntegrationCollections,
    IntegrationStore,
)

# pylint: disable=redefined-outer-name


@pytest.fixture
def runner() -> CliRunner:
    """Click runner for invoking the CLI."""
    return CliRunner()


@pytest.fixture
def cli_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Environment for invocations: no stray config, logs under tmp_path."""
    for name in (config.BACKEND_ENV, config.DB_URL_ENV):
        monkeypatch.delenv(name, raising=False)
    return {"POSBRIDGE_LOG_PATH": str(tmp_path / "posbridge.log")}


@pytest.fixture
def shared_app(monkeypatch: pytest.MonkeyPatch) -> AppContainer:
    """One in-memory application shared by every invocation in a test.

    The ``memory`` backend normally starts empty on each run; sharing the
    container lets a test chain commands.
    """
    app = AppContainer(
        integration_store=IntegrationStore(
            InMemoryDocumentStore(IntegrationCollections().specs())
        ),
        id_generator=SimpleIdGenerator(prefix="id-", length=3),
    )
    monkeypatch.setattr(integrations_cli, "bootstrap", lambda: app)
    return app
