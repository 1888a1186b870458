"""Bootstrap (composition root) for POSBRIDGE.

Assembles the application at runtime: reads configuration, picks a
document-store adapter and wires it into the integration store.

Import rules:
- Entry points obtain the integration store from *this* package.
- This package may import: `posbridge.adapters`, `posbridge.service_layer`,
  `posbridge.interfaces`, `posbridge.domain`, and `posbridge.config`.
- Inner layers must not import `posbridge.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap, build_document_store

__all__ = ["AppContainer", "bootstrap", "build_document_store"]
