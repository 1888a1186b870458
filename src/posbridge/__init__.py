"""POSBRIDGE

Integration record store for a multi-tenant point-of-sale integration
product. Persists integrations and their configuration entries on top of a
pluggable document store, keeping the two collections consistent without
multi-document transactions.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
