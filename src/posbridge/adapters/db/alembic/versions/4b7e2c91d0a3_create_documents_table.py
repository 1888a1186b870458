"""create documents table

Revision ID: 4b7e2c91d0a3
Revises:
Create Date: 2026-10-17 09:12:44.519203

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "4b7e2c91d0a3"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "documents",
        sa.Column(
            "collection",
            sa.String(length=128),
            nullable=False,
            comment="Logical collection name (e.g., Integrations).",
        ),
        sa.Column(
            "doc_key",
            sa.String(length=512),
            nullable=False,
            comment="Primary key of the document within its collection.",
        ),
        sa.Column(
            "body",
            sa.JSON(none_as_null=True).with_variant(
                postgresql.JSONB(none_as_null=True), "postgresql"
            ),
            nullable=False,
            comment="The stored document (JSON object).",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="UTC timestamp of the last write.",
        ),
        sa.PrimaryKeyConstraint("collection", "doc_key", name=op.f("pk_documents")),
        comment="Key/value documents for every collection.",
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("documents")
