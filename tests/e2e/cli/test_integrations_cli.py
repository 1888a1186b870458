"""End-to-end tests for ``posbridge integrations``.

Commands run through ``CliRunner`` against a shared in-memory application
(see ``shared_app``) or a migrated SQLite file.
"""

from __future__ import annotations

import json

import pytest
from alembic import command
from click.testing import CliRunner

from posbridge import config
from posbridge.bootstrap import AppContainer
from posbridge.domain import Integration
from posbridge.entrypoints.cli.main import posbridge

# pylint: disable=redefined-outer-name,unused-argument


def _run(runner: CliRunner, env: dict[str, str], *args: str, **kwargs):
    return runner.invoke(posbridge, ["--no-color", *args], env=env, **kwargs)


class TestSharedMemoryApp:
    """Command behavior with a store that outlives each invocation."""

    @staticmethod
    def test_create_generates_an_id(runner, cli_env, shared_app: AppContainer):
        """Without --id a new ID comes from the generator; JSON goes to stdout."""
        result = _run(runner, cli_env, "integrations", "create", "--pos-id", "pos-9")

        assert result.exit_code == 0, result.output
        record = json.loads(result.stdout)
        assert record["integrationId"] == "id-001"
        assert record["posId"] == "pos-9"
        assert record["createdAt"] == record["lastSync"]
        assert record["configs"] == []
        assert "Saved integration id-001" in result.stderr

    @staticmethod
    def test_show_includes_configs(runner, cli_env, shared_app: AppContainer):
        """set-config values appear under the integration's configs."""
        _run(runner, cli_env, "integrations", "create", "--pos-id", "pos-9", "--id", "int-1")
        result = _run(
            runner,
            cli_env,
            "integrations",
            "set-config",
            "int-1",
            "--config-id",
            "cfg-1",
            "currency=USD",
            "enabled=true",
        )
        assert result.exit_code == 0, result.output

        shown = json.loads(_run(runner, cli_env, "integrations", "show", "int-1").stdout)

        assert shown["configs"] == [
            {
                "integrationConfigId": "cfg-1",
                "integrationId": "int-1",
                "currency": "USD",
                "enabled": True,
            }
        ]

    @staticmethod
    def test_list_by_pos(runner, cli_env, shared_app: AppContainer):
        """list returns only the tenant's integrations."""
        for int_id, pos_id in (("int-1", "pos-9"), ("int-2", "pos-9"), ("int-3", "pos-1")):
            _run(runner, cli_env, "integrations", "create", "--pos-id", pos_id, "--id", int_id)

        result = _run(runner, cli_env, "integrations", "list", "--pos-id", "pos-9")

        assert result.exit_code == 0, result.output
        assert sorted(r["integrationId"] for r in json.loads(result.stdout)) == [
            "int-1",
            "int-2",
        ]
        empty = _run(runner, cli_env, "integrations", "list", "--pos-id", "nope")
        assert json.loads(empty.stdout) == []

    @staticmethod
    def test_touch_moves_last_sync(runner, cli_env, shared_app: AppContainer):
        """touch refreshes lastSync and keeps createdAt."""
        shared_app.integration_store.save_integration(
            Integration("int-1", "pos-9")
        )
        before = shared_app.integration_store.get_integration_by_id("int-1")

        result = _run(runner, cli_env, "integrations", "touch", "int-1")

        assert result.exit_code == 0, result.output
        after = shared_app.integration_store.get_integration_by_id("int-1")
        assert after.created_at == before.created_at
        assert after.last_sync >= before.last_sync

    @staticmethod
    def test_delete_asks_for_confirmation(runner, cli_env, shared_app: AppContainer):
        """Declining the prompt aborts and keeps the record."""
        _run(runner, cli_env, "integrations", "create", "--pos-id", "p", "--id", "int-1")

        result = _run(runner, cli_env, "integrations", "delete", "int-1", input="n\n")

        assert result.exit_code == 1
        assert shared_app.integration_store.get_integration_by_id("int-1")

    @staticmethod
    def test_delete_cascades(runner, cli_env, shared_app: AppContainer):
        """delete --force removes the integration and its configs."""
        _run(runner, cli_env, "integrations", "create", "--pos-id", "p", "--id", "int-1")
        _run(runner, cli_env, "integrations", "set-config", "int-1", "a=1")

        result = _run(runner, cli_env, "integrations", "delete", "int-1", "--force")

        assert result.exit_code == 0, result.output
        configs = _run(runner, cli_env, "integrations", "configs", "int-1")
        assert json.loads(configs.stdout) == []
        missing = _run(runner, cli_env, "integrations", "show", "int-1")
        assert missing.exit_code == 1
        assert "Integration with ID int-1 not found" in missing.stderr

    @staticmethod
    def test_set_config_for_missing_integration_fails(
        runner, cli_env, shared_app: AppContainer
    ):
        """Repository errors become CLI errors with the repository message."""
        result = _run(runner, cli_env, "integrations", "set-config", "ghost", "a=1")

        assert result.exit_code == 1
        assert "save_integration_config(ghost)" in result.stderr
        assert shared_app.integration_store.get_integration_configs("ghost") == []

    @staticmethod
    def test_set_config_rejects_malformed_pairs(runner, cli_env, shared_app):
        """Arguments without '=' are a usage error."""
        result = _run(runner, cli_env, "integrations", "set-config", "int-1", "oops")

        assert result.exit_code == 2
        assert "Expected KEY=VALUE" in result.stderr


class TestConfiguredBackends:
    """Wiring through POSBRIDGE_BACKEND without a shared app."""

    @staticmethod
    def test_sql_backend_without_url(runner, cli_env):
        """The default sql backend explains the missing URL."""
        result = _run(runner, cli_env, "integrations", "show", "int-1")

        assert result.exit_code == 1
        assert "POSBRIDGE_DB_URL is not set" in result.stderr

    @staticmethod
    def test_malformed_db_url(runner, cli_env):
        """A URL SQLAlchemy cannot parse is reported without a traceback."""
        env = {**cli_env, config.BACKEND_ENV: "sql", config.DB_URL_ENV: "not a url"}
        result = _run(runner, env, "integrations", "show", "int-1")

        assert result.exit_code == 1
        assert "not a valid SQLAlchemy database URL" in result.stderr
        assert "Traceback" not in result.output

    @staticmethod
    def test_unknown_backend(runner, cli_env):
        """Unknown backends are reported with the valid choices."""
        env = {**cli_env, config.BACKEND_ENV: "mongo"}
        result = _run(runner, env, "integrations", "show", "int-1")

        assert result.exit_code == 1
        assert "Unsupported backend 'mongo'" in result.stderr

    @staticmethod
    def test_help_needs_no_backend(runner, cli_env):
        """Help output works without any storage configured."""
        result = _run(runner, cli_env, "integrations", "create", "--help")

        assert result.exit_code == 0
        assert "--pos-id" in result.stdout

    @staticmethod
    def test_sqlite_round_trip(runner, cli_env, sqlite_url: str):
        """Records written in one invocation are read in the next."""
        command.upgrade(config.build_alembic_config(sqlite_url), "head")
        env = {**cli_env, config.BACKEND_ENV: "sql", config.DB_URL_ENV: sqlite_url}

        created = _run(runner, env, "integrations", "create", "--pos-id", "pos-9")
        assert created.exit_code == 0, created.output
        int_id = json.loads(created.stdout)["integrationId"]

        shown = _run(runner, env, "integrations", "show", int_id)

        assert shown.exit_code == 0, shown.output
        assert json.loads(shown.stdout)["posId"] == "pos-9"
        assert len(int_id) == 26


@pytest.mark.parametrize("group", ["db", "integrations"])
def test_groups_are_registered(runner, cli_env, group):
    """Top-level help lists every command group."""
    result = _run(runner, cli_env, "--help")

    assert result.exit_code == 0
    assert group in result.stdout
