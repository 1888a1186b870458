"""Global pytest fixtures and default marks for POSBRIDGE."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

# pylint: disable=unused-argument

pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.postgres",
]

TESTS_ROOT = Path(__file__).parent.resolve()

# top-level test directory -> mark added to every test collected under it
DEFAULT_MARKS = {
    "unit": "unit",
    "contract": "contract",
    "integration": "integration",
    "e2e": "e2e",
}


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each test after the top-level directory it lives in."""
    for item in items:
        try:
            top = item.path.resolve().relative_to(TESTS_ROOT).parts[0]
        except ValueError:
            continue
        if (name := DEFAULT_MARKS.get(top)) is None:
            continue
        if not any(marker.name == name for marker in item.iter_markers()):
            item.add_marker(getattr(pytest.mark, name))


@pytest.fixture
def engine(request: pytest.FixtureRequest) -> Engine:
    """Indirection fixture to parametrize over engine-providing fixtures.

    Example:
        ```py
        @pytest.mark.parametrize("engine", ["postgres_engine", "sqlite_engine_file"], indirect=True)
        def test_something(engine): ...
        ```
    """
    return request.getfixturevalue(request.param)
