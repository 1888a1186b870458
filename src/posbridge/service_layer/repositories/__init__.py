"""Package for repository implementations."""

from .errors import NotFoundError, PersistenceError, RepositoryError, ValidationError
from .integration_store import IntegrationCollections, IntegrationStore

__all__ = [
    "IntegrationCollections",
    "IntegrationStore",
    "NotFoundError",
    "PersistenceError",
    "RepositoryError",
    "ValidationError",
]
