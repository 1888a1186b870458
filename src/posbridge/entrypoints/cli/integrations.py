"""POSBRIDGE integrations CLI.

Operator commands over the integration store of the configured backend
(``POSBRIDGE_BACKEND``). Records are printed as JSON on **stdout**; status
lines go to **stderr**.

Note:
    The ``memory`` backend lives for one process only, so with it every
    invocation starts from an empty store.

Examples
    $ posbridge integrations create --pos-id square-001
    $ posbridge integrations set-config 01J... currency=USD enabled=true
    $ posbridge integrations list --pos-id square-001
"""

from __future__ import annotations

import functools
import json
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import click
import click_extra as clickx
from sqlalchemy.exc import ArgumentError

from posbridge import config
from posbridge.bootstrap import AppContainer, bootstrap
from posbridge.domain import Integration, IntegrationConfig
from posbridge.service_layer.repositories import RepositoryError

from .db import INVALID_URL_FORMAT_MSG
from .helpers import parse_key_values, success, warn


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Turn configuration and repository failures into CLI errors."""
    try:
        yield
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(
            "POSBRIDGE_DB_URL is not set (required by the 'sql' backend)."
        ) from e
    except ArgumentError as e:
        raise click.ClickException(INVALID_URL_FORMAT_MSG) from e
    except config.UnsupportedBackendError as e:
        raise click.ClickException(str(e)) from e
    except RepositoryError as e:
        raise click.ClickException(str(e)) from e


def _integration_json(integration: Integration) -> dict[str, Any]:
    return {
        **integration.to_document(),
        "configs": [c.to_document() for c in integration.configs],
    }


def _echo_json(data: Any) -> None:
    # DynamoDB hands numbers back as Decimal
    click.echo(json.dumps(data, indent=2, sort_keys=True, default=str))


def pass_app(f: Callable[..., None]) -> Callable[..., None]:
    """Wire the application on invocation and pass it as the first argument.

    Wiring happens inside the command, so `--help` works without a backend.
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        with _handle_errors():
            app = bootstrap()
        f(app, *args, **kwargs)

    return wrapper


@click.group(cls=clickx.ExtraGroup)
def integrations() -> None:
    """Manage point-of-sale integrations and their configs."""


@integrations.command()
@click.option("--pos-id", required=True, help="Point-of-sale tenant ID.")
@click.option(
    "--id",
    "integration_id",
    default=None,
    help="Integration ID (a new ULID when omitted).",
)
@pass_app
def create(app: AppContainer, pos_id: str, integration_id: str | None) -> None:
    """Create (or replace) an integration."""
    integration = Integration(
        integration_id=integration_id or app.id_generator.new_id(), pos_id=pos_id
    )
    with _handle_errors():
        app.integration_store.save_integration(integration)
    _echo_json(_integration_json(integration))
    success(f"Saved integration {integration.integration_id}")


@integrations.command()
@click.argument("integration_id")
@pass_app
def show(app: AppContainer, integration_id: str) -> None:
    """Show an integration with its configs."""
    with _handle_errors():
        integration = app.integration_store.get_integration_by_id(integration_id)
    _echo_json(_integration_json(integration))


@integrations.command(name="list")
@click.option("--pos-id", required=True, help="Point-of-sale tenant ID.")
@pass_app
def list_(app: AppContainer, pos_id: str) -> None:
    """List the integrations of a point-of-sale tenant."""
    with _handle_errors():
        found = app.integration_store.get_integrations_by_pos_id(pos_id)
    _echo_json([_integration_json(i) for i in found])


@integrations.command()
@click.argument("integration_id")
@pass_app
def touch(app: AppContainer, integration_id: str) -> None:
    """Refresh the last-sync time of an existing integration."""
    with _handle_errors():
        integration = app.integration_store.get_integration_by_id(integration_id)
        app.integration_store.update_integration(integration)
    _echo_json(_integration_json(integration))
    success(f"Updated integration {integration_id}")


@integrations.command()
@click.argument("integration_id")
@click.option("--force", is_flag=True, help="Delete without confirmation.")
@pass_app
def delete(app: AppContainer, integration_id: str, force: bool) -> None:
    """Delete an integration and all of its configs."""
    if not force:
        warn(f"This will delete integration {integration_id} and all of its configs.")
        click.confirm("Are you sure you want to proceed?", abort=True, err=True)
    with _handle_errors():
        app.integration_store.delete_integration(integration_id)
    success(f"Deleted integration {integration_id}")


@integrations.command()
@click.argument("integration_id")
@pass_app
def configs(app: AppContainer, integration_id: str) -> None:
    """List the configs of an integration."""
    with _handle_errors():
        found = app.integration_store.get_integration_configs(integration_id)
    _echo_json([c.to_document() for c in found])


@integrations.command(name="set-config")
@click.argument("integration_id")
@click.argument("values", nargs=-1, callback=parse_key_values)
@click.option(
    "--config-id",
    default=None,
    help="Config ID (a new ULID when omitted).",
)
@pass_app
def set_config(
    app: AppContainer,
    integration_id: str,
    values: dict[str, Any],
    config_id: str | None,
) -> None:
    """Write a config for an existing integration from KEY=VALUE pairs.

    JSON values are decoded, except non-integer numbers, which are stored as
    strings.
    """
    integration_config = IntegrationConfig(
        integration_config_id=config_id or app.id_generator.new_id(),
        integration_id=integration_id,
        payload=values,
    )
    with _handle_errors():
        app.integration_store.save_integration_config(integration_config)
    _echo_json(integration_config.to_document())
    success(f"Saved config {integration_config.integration_config_id}")
