"""POSBRIDGE test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of one module; fakes and mocks at boundaries.
- contract/     : Behavior every implementation of a port must share, parametrized
                  over the implementations (memory, SQLite, ...).
- integration/  : Migrated SQLite files and Testcontainers Postgres.
- e2e/          : The ``posbridge`` CLI driven through Click's ``CliRunner``.
- fixtures/     : Engine fixtures loaded via ``pytest_plugins``.
- helpers/      : Shared utilities (no tests here).

Each test is marked after its top-level folder (see ``conftest.py``);
Hypothesis tests additionally carry ``@pytest.mark.property``.
"""
