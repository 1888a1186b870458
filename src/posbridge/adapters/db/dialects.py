"""Dialect names and dialect-specific statement builders.

The SQL document store supports PostgreSQL and SQLite. Both speak
``INSERT ... ON CONFLICT``, but SQLAlchemy exposes it through per-dialect
``insert`` constructs; this module picks the right one.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class UnsupportedDialect(Exception):
    """Raised when an unsupported database dialect is encountered."""


class DialectName(str, Enum):
    """Supported SQLAlchemy dialect names.

    Attributes:
        POSTGRES: PostgreSQL dialect (``"postgresql"``).
        SQLITE:   SQLite dialect (``"sqlite"``).
    """

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Normalize a dialect or URL scheme string (``'postgresql+psycopg'``, ``'sqlite'``).

        Raises:
            UnsupportedDialect: if the dialect is not recognized or supported.
        """
        base = (dialect_str or "").strip().lower().split("+", 1)[0]
        if base in {"postgres", "postgresql", "pg"}:
            return cls.POSTGRES
        if base == "sqlite":
            return cls.SQLITE
        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Extract the dialect from a SQLAlchemy Engine or Connection.

        Raises:
            UnsupportedDialect: if the dialect is not recognized or supported.
        """
        try:
            name = obj.dialect.name
        except AttributeError as e:
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            ) from e
        return cls.from_string(name)

    @property
    def insert(self) -> Callable[..., Any]:
        """The dialect's ``insert`` construct (supports ``on_conflict_do_update``)."""
        if self is DialectName.POSTGRES:
            return pg_insert
        return sqlite_insert
