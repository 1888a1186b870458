"""Interfaces (application boundary) for POSBRIDGE.

Defines framework-free application contracts: the document-store port the
integration store runs on, ID generators, and the small value types shared by
the service layer and adapters. Business rules stay out of this package.

Dependency rule: this package is independent, do not import from any other
`posbridge.*` modules. It may be imported by `posbridge.service_layer`,
`posbridge.adapters`, and `posbridge.bootstrap`.
"""
