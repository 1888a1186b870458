"""SQLAlchemy-backed DocumentStore adapter.

Stores every collection in the shared ``documents`` table (see
`posbridge.adapters.document_store.schema`). Supports PostgreSQL and SQLite.

Each primitive runs in its own short transaction on the engine, so
single-key operations are atomic and one adapter instance can be shared
across threads. Nothing spans more than one document.

Error mapping:
    - ``DBAPIError`` (connection loss, lock timeouts, ...) → ``StoreUnavailableError``
    - any other ``StatementError`` (e.g. a value JSON cannot encode) → ``InvalidDocumentError``
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, select
from sqlalchemy.exc import DBAPIError, StatementError

from posbridge.adapters.db.dialects import DialectName
from posbridge.interfaces.document_store import (
    CollectionSpec,
    Document,
    DocumentStore,
    InvalidDocumentError,
    StoreUnavailableError,
)

from .base import CollectionRegistry
from .schema import documents

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.sql import Executable


class SqlAlchemyDocumentStore(DocumentStore):
    """DocumentStore over a single JSON ``documents`` table."""

    def __init__(self, engine: Engine, collections: Iterable[CollectionSpec]):
        self.engine = engine
        self.dialect = DialectName.from_sqlalchemy(engine)
        self._registry = CollectionRegistry(collections)

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def put(self, collection: str, document: Mapping[str, Any]) -> None:
        key = self._registry.key_of(collection, document)
        insert = self.dialect.insert(documents).values(
            collection=collection, doc_key=key, body=dict(document)
        )
        stmt = insert.on_conflict_do_update(
            index_elements=[documents.c.collection, documents.c.doc_key],
            set_={
                "body": insert.excluded.body,
                "updated_at": func.current_timestamp(),
            },
        )
        try:
            self._write(stmt)
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e
        except StatementError as e:  # bind-time failures, e.g. not JSON-encodable
            raise InvalidDocumentError(collection, str(e.orig or e)) from e

    def get(self, collection: str, key: str) -> Document | None:
        self._registry.spec(collection)
        stmt = select(documents.c.body).where(
            documents.c.collection == collection,
            documents.c.doc_key == key,
        )
        try:
            with self.engine.connect() as connection:
                body = connection.execute(stmt).scalar_one_or_none()
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e
        return dict(body) if body is not None else None

    def query(self, collection: str, index: str, index_key: str) -> list[Document]:
        field_name = self._registry.index_field(collection, index)
        return self._select_matching(collection, field_name, index_key)

    def scan(self, collection: str, field_name: str, value: str) -> list[Document]:
        self._registry.spec(collection)
        return self._select_matching(collection, field_name, value)

    def delete(self, collection: str, key: str) -> None:
        self._registry.spec(collection)
        stmt = delete(documents).where(
            documents.c.collection == collection,
            documents.c.doc_key == key,
        )
        try:
            self._write(stmt)
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _write(self, stmt: Executable) -> None:
        with self.engine.begin() as connection:
            connection.execute(stmt)

    def _select_matching(
        self, collection: str, field_name: str, value: str
    ) -> list[Document]:
        """Return documents of ``collection`` whose ``field_name`` equals ``value``.

        The comparison runs inside the database on the JSON body
        (``->>`` on Postgres, ``JSON_EXTRACT`` on SQLite), ordered by key.
        """
        stmt = (
            select(documents.c.body)
            .where(
                documents.c.collection == collection,
                documents.c.body[field_name].as_string() == value,
            )
            .order_by(documents.c.doc_key.asc())
        )
        try:
            with self.engine.connect() as connection:
                rows = connection.execute(stmt).scalars().all()
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e
        return [dict(body) for body in rows]
