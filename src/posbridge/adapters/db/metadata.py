"""Shared SQLAlchemy `MetaData` with a deterministic naming convention.

Every POSBRIDGE table attaches to this object so constraint and index names
are stable across Alembic autogenerate runs:

    - Indexes:       ix_<table>_<col...>
    - Unique:        uq_<table>_<col...>
    - Check:         ck_<table>_<constraint_name>
    - Primary key:   pk_<table>
"""

from sqlalchemy import MetaData

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_N_label)s",
        "uq": "uq_%(table_name)s_%(column_0_N_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "pk": "pk_%(table_name)s",
    }
)
