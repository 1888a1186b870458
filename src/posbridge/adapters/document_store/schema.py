"""SQL document store schema.

All collections share one ``documents`` table. A row is one document,
addressed by ``(collection, doc_key)``; the document itself lives in the JSON
``body`` column and secondary-index lookups filter on fields inside it.

| Constraint                        | Purpose                          |
|-----------------------------------|----------------------------------|
| PRIMARY KEY(collection, doc_key)  | single-key upsert/get/delete     |
"""

from __future__ import annotations

from sqlalchemy import Column, PrimaryKeyConstraint, String, Table, text

from posbridge.adapters.db.metadata import metadata
from posbridge.adapters.db.sa_types import PORTABLE_JSON, UTCDateTime

__all__ = ["documents"]

documents = Table(
    "documents",
    metadata,
    Column(
        "collection",
        String(128),
        nullable=False,
        comment="Logical collection name (e.g., Integrations).",
    ),
    Column(
        "doc_key",
        String(512),
        nullable=False,
        comment="Primary key of the document within its collection.",
    ),
    Column(
        "body",
        PORTABLE_JSON,
        nullable=False,
        comment="The stored document (JSON object).",
    ),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="UTC timestamp of the last write.",
    ),
    PrimaryKeyConstraint("collection", "doc_key"),
    comment="Key/value documents for every collection.",
)
