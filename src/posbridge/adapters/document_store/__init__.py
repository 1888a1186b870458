"""Concrete implementations of the DocumentStore interface."""

from .dynamodb import DynamoDBDocumentStore
from .memory import InMemoryDocumentStore
from .sqlalchemy_store import SqlAlchemyDocumentStore

__all__ = [
    "DynamoDBDocumentStore",
    "InMemoryDocumentStore",
    "SqlAlchemyDocumentStore",
]
