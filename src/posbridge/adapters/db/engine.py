"""Database engine factory.

Creates SQLAlchemy Engines for the SQL document store and applies
backend-specific tuning. Use `make_engine` whenever an Engine is needed so
every connection is configured the same way.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Engine

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}

# a writer holding the database lock makes other connections wait this long
SQLITE_BUSY_TIMEOUT_MS = 5000


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite."""
    u = make_url(str(url))
    return u.get_backend_name() in SQLITE_NAMES


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    For SQLite the following PRAGMAs are applied on every connection:
        - ``journal_mode=WAL`` (readers do not block the single writer)
        - ``synchronous=NORMAL`` (balanced durability)
        - ``busy_timeout`` (wait for the write lock instead of failing at once)

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """

    engine = create_engine(url, echo=echo)

    if is_sqlite(url):

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA journal_mode=WAL;")
            cur.execute("PRAGMA synchronous=NORMAL;")
            cur.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")
            cur.close()

    return engine
