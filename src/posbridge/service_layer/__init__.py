"""Service layer for POSBRIDGE.

Application logic that sits between callers (CLI, API handlers) and the
document-store port: the integration store and its error taxonomy.
"""
