"""Domain layer for POSBRIDGE.

Holds the integration records and their mapping to and from stored documents.

Dependency rule: this package must not import from `posbridge.adapters`,
`posbridge.service_layer` or `posbridge.bootstrap`.
"""

from .integration import DocumentMappingError, Integration, IntegrationConfig

__all__ = ["DocumentMappingError", "Integration", "IntegrationConfig"]
