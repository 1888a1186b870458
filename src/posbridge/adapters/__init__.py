"""Adapters (infrastructure) for POSBRIDGE.

Provide concrete implementations of the interfaces (document stores backed by
memory, SQL databases and DynamoDB; ID generators), plus persistence mapping
and related wiring (engines, metadata, migrations).

Dependency rule: may import `posbridge.interfaces`; the domain must not import
this package.
"""
