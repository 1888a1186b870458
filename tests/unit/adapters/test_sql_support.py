"""Unit tests for the SQL support modules: dialects, column types and engines."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy import text
from sqlalchemy.dialects.postgresql import dialect as PostgresDialect
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import dialect as SQLiteDialect
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from posbridge.adapters.db.dialects import DialectName, UnsupportedDialect
from posbridge.adapters.db.engine import is_sqlite, make_engine
from posbridge.adapters.db.sa_types import UTCDateTime


class TestDialectName:
    """DialectName parsing and statement builders."""

    @staticmethod
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("postgresql+psycopg", DialectName.POSTGRES),
            ("postgres", DialectName.POSTGRES),
            (" PostgreSQL ", DialectName.POSTGRES),
            ("sqlite", DialectName.SQLITE),
            ("sqlite+pysqlite", DialectName.SQLITE),
        ],
    )
    def test_from_string(raw, expected):
        """URL schemes and driver suffixes normalize to the base dialect."""
        assert DialectName.from_string(raw) is expected

    @staticmethod
    @pytest.mark.parametrize("raw", ["mysql+pymysql", "", "oracle"])
    def test_unsupported(raw):
        """Anything else is rejected."""
        with pytest.raises(UnsupportedDialect):
            DialectName.from_string(raw)

    @staticmethod
    def test_from_sqlalchemy_reads_dialect_name():
        """Engines and connections expose ``.dialect.name``."""
        fake = SimpleNamespace(dialect=SimpleNamespace(name="sqlite"))
        assert DialectName.from_sqlalchemy(fake) is DialectName.SQLITE

    @staticmethod
    def test_from_sqlalchemy_without_dialect():
        """Objects without a dialect are rejected."""
        with pytest.raises(UnsupportedDialect):
            DialectName.from_sqlalchemy(object())

    @staticmethod
    def test_insert_constructs():
        """Each dialect hands out its own upsert-capable insert."""
        assert DialectName.POSTGRES.insert is pg_insert
        assert DialectName.SQLITE.insert is sqlite_insert


class TestUTCDateTime:
    """UTCDateTime bind/result processing without a database."""

    @staticmethod
    @pytest.mark.parametrize(
        "dialect", [SQLiteDialect(), PostgresDialect()], ids=["sqlite", "postgres"]
    )
    def test_bind_none(dialect):
        """None passes through."""
        assert UTCDateTime().process_bind_param(None, dialect) is None

    @staticmethod
    def test_sqlite_binds_naive_utc():
        """SQLite receives naive UTC wall time."""
        value = datetime(2024, 1, 1, 14, tzinfo=timezone(timedelta(hours=2)))
        out = UTCDateTime().process_bind_param(value, SQLiteDialect())
        assert out == datetime(2024, 1, 1, 12)
        assert out.tzinfo is None

    @staticmethod
    def test_postgres_binds_aware_utc():
        """Postgres receives aware UTC; naive input is taken as UTC."""
        out = UTCDateTime().process_bind_param(datetime(2024, 1, 1, 12), PostgresDialect())
        assert out == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
        assert out.utcoffset() == timedelta(0)

    @staticmethod
    def test_result_is_tagged_utc():
        """Naive results from SQLite come back as aware UTC."""
        out = UTCDateTime().process_result_value(datetime(2024, 1, 1, 12), SQLiteDialect())
        assert out == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)

    @staticmethod
    def test_result_passes_non_datetimes():
        """Strings and None are returned unchanged."""
        assert UTCDateTime().process_result_value(None, SQLiteDialect()) is None
        assert UTCDateTime().process_result_value("x", SQLiteDialect()) == "x"

    @staticmethod
    def test_python_type():
        """The Python type is datetime."""
        assert UTCDateTime().python_type is datetime


class TestEngine:
    """make_engine and is_sqlite."""

    @staticmethod
    @pytest.mark.parametrize(
        "url, expected",
        [
            ("sqlite:///x.db", True),
            ("sqlite+pysqlite:///:memory:", True),
            ("postgresql+psycopg://u:p@localhost/db", False),
        ],
    )
    def test_is_sqlite(url, expected):
        """Only SQLite URLs are recognized as SQLite."""
        assert is_sqlite(url) is expected

    @staticmethod
    def test_sqlite_pragmas_are_applied(tmp_path):
        """File databases get WAL, NORMAL sync and a busy timeout."""
        engine = make_engine(f"sqlite:///{tmp_path / 'p.db'}")
        try:
            with engine.connect() as conn:
                assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
                assert conn.execute(text("PRAGMA synchronous")).scalar() == 1
                assert conn.execute(text("PRAGMA busy_timeout")).scalar() == 5000
        finally:
            engine.dispose()
