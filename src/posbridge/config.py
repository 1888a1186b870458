"""Configuration utilities for POSBRIDGE.

Settings come from environment variables; this module centralizes their
names, defaults, and validation, plus the programmatic Alembic config.

| Variable                              | Default                |
|---------------------------------------|------------------------|
| ``POSBRIDGE_BACKEND``                 | ``sql``                |
| ``POSBRIDGE_DB_URL``                  | (required for ``sql``) |
| ``POSBRIDGE_AWS_REGION``              | ``us-east-2``          |
| ``POSBRIDGE_DYNAMODB_ENDPOINT``       | (unset)                |
| ``POSBRIDGE_INTEGRATIONS_TABLE``      | ``Integrations``       |
| ``POSBRIDGE_INTEGRATION_CONFIGS_TABLE`` | ``IntegrationConfigs`` |
"""

import os
import sys
from enum import Enum
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate

DB_URL_ENV = "POSBRIDGE_DB_URL"
BACKEND_ENV = "POSBRIDGE_BACKEND"
AWS_REGION_ENV = "POSBRIDGE_AWS_REGION"
DYNAMODB_ENDPOINT_ENV = "POSBRIDGE_DYNAMODB_ENDPOINT"
INTEGRATIONS_TABLE_ENV = "POSBRIDGE_INTEGRATIONS_TABLE"
INTEGRATION_CONFIGS_TABLE_ENV = "POSBRIDGE_INTEGRATION_CONFIGS_TABLE"

DEFAULT_AWS_REGION = "us-east-2"
DEFAULT_INTEGRATIONS_TABLE = "Integrations"
DEFAULT_INTEGRATION_CONFIGS_TABLE = "IntegrationConfigs"


class DatabaseUrlNotSetError(Exception):
    """Raised when the POSBRIDGE_DB_URL environment variable is not set."""


class UnsupportedBackendError(ValueError):
    """Raised when POSBRIDGE_BACKEND names a backend that does not exist."""

    def __init__(self, value: str) -> None:
        choices = ", ".join(b.value for b in Backend)
        super().__init__(f"Unsupported backend {value!r}; expected one of: {choices}")
        self.value = value


class Backend(str, Enum):
    """Document store backends the application can be wired with."""

    MEMORY = "memory"
    SQL = "sql"
    DYNAMODB = "dynamodb"


def get_backend() -> Backend:
    """Get the configured document store backend.

    Raises:
        UnsupportedBackendError: If `POSBRIDGE_BACKEND` holds an unknown value.
    """
    raw = os.environ.get(BACKEND_ENV) or Backend.SQL.value
    try:
        return Backend(raw.strip().lower())
    except ValueError as e:
        raise UnsupportedBackendError(raw) from e


def get_db_url() -> str:
    """Get the database URL from the environment.

    Returns:
        The value of the `POSBRIDGE_DB_URL` environment variable.

    Raises:
        DatabaseUrlNotSetError: If `POSBRIDGE_DB_URL` is not set.
    """
    if not (url := os.environ.get(DB_URL_ENV)):
        raise DatabaseUrlNotSetError
    return url


def get_aws_region() -> str:
    """AWS region hosting the DynamoDB tables."""
    return os.environ.get(AWS_REGION_ENV) or DEFAULT_AWS_REGION


def get_dynamodb_endpoint() -> str | None:
    """Optional DynamoDB endpoint override (e.g. DynamoDB Local)."""
    return os.environ.get(DYNAMODB_ENDPOINT_ENV) or None


def get_table_names() -> tuple[str, str]:
    """Names of the integrations and integration-configs collections."""
    return (
        os.environ.get(INTEGRATIONS_TABLE_ENV) or DEFAULT_INTEGRATIONS_TABLE,
        os.environ.get(INTEGRATION_CONFIGS_TABLE_ENV)
        or DEFAULT_INTEGRATION_CONFIGS_TABLE,
    )


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Build an Alembic `Config` object for the document store migrations.

    Sets only Alembic "main" options:
    - `sqlalchemy.url` → the database URL you pass
    - `script_location` → the packaged Alembic scripts

    Args:
        db_url: SQLAlchemy database URL (e.g., `sqlite:///posbridge.db`).
            May be `None` only where Alembic won't connect (e.g. `heads`).
        stdout: Text stream Alembic writes status lines to.

    Returns:
        An `alembic.config.Config` pointing to the migration scripts.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    cfg.set_main_option(
        ALEMBIC_SCRIPT_LOCATION_KEY,
        str(files("posbridge.adapters.db.alembic")),
    )
    return cfg
