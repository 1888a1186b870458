"""DynamoDB-backed DocumentStore adapter.

Each collection maps to a DynamoDB table of the same name whose partition key
is the collection's key field (a string attribute). Secondary indexes are
DynamoDB global secondary indexes keyed on the indexed field.

Dependencies: boto3
System role: production document store for the integration records

Note:
    DynamoDB numbers come back as ``decimal.Decimal`` and Python floats are
    rejected on write; callers that keep numbers in config payloads should
    use ``Decimal`` or strings.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import boto3
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from posbridge.interfaces.document_store import (
    CollectionSpec,
    Document,
    DocumentStore,
    InvalidDocumentError,
    StoreUnavailableError,
)

from .base import CollectionRegistry

DEFAULT_REGION = "us-east-2"


class DynamoDBDocumentStore(DocumentStore):
    """DocumentStore over DynamoDB tables via the low-level boto3 client."""

    def __init__(self, client: Any, collections: Iterable[CollectionSpec]) -> None:
        """
        Initialize the store around an existing client.

        Args:
            client: A boto3 ``dynamodb`` client (thread-safe, shared).
            collections: The tables this store serves.
        """
        self._client = client
        self._registry = CollectionRegistry(collections)
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

    @classmethod
    def from_region(
        cls,
        collections: Iterable[CollectionSpec],
        region: str = DEFAULT_REGION,
        endpoint_url: str | None = None,
    ) -> DynamoDBDocumentStore:
        """
        Build a store with a fresh boto3 client.

        Credentials come from the standard boto3 chain (environment, shared
        config, instance role).

        Args:
            collections: The tables this store serves.
            region: AWS region of the tables.
            endpoint_url: Optional endpoint override, e.g. a local DynamoDB.
        """
        client = boto3.client("dynamodb", region_name=region, endpoint_url=endpoint_url)
        return cls(client, collections)

    # --- writes ---

    def put(self, collection: str, document: Mapping[str, Any]) -> None:
        self._registry.key_of(collection, document)
        try:
            item = {
                name: self._serializer.serialize(value)
                for name, value in document.items()
            }
        except TypeError as e:  # floats, unsupported types
            raise InvalidDocumentError(collection, str(e)) from e
        self._call("put_item", TableName=collection, Item=item)

    def delete(self, collection: str, key: str) -> None:
        spec = self._registry.spec(collection)
        self._call(
            "delete_item",
            TableName=collection,
            Key={spec.key_field: {"S": key}},
        )

    # --- reads ---

    def get(self, collection: str, key: str) -> Document | None:
        spec = self._registry.spec(collection)
        response = self._call(
            "get_item",
            TableName=collection,
            Key={spec.key_field: {"S": key}},
        )
        if (item := response.get("Item")) is None:
            return None
        return self._deserialize(item)

    def query(self, collection: str, index: str, index_key: str) -> list[Document]:
        field_name = self._registry.index_field(collection, index)
        return self._collect_pages(
            "query",
            TableName=collection,
            IndexName=index,
            KeyConditionExpression="#k = :v",
            ExpressionAttributeNames={"#k": field_name},
            ExpressionAttributeValues={":v": {"S": index_key}},
        )

    def scan(self, collection: str, field_name: str, value: str) -> list[Document]:
        self._registry.spec(collection)
        return self._collect_pages(
            "scan",
            TableName=collection,
            FilterExpression="#f = :v",
            ExpressionAttributeNames={"#f": field_name},
            ExpressionAttributeValues={":v": {"S": value}},
        )

    # --- internals ---

    def _collect_pages(self, operation: str, **params: Any) -> list[Document]:
        """Run a query/scan and follow ``LastEvaluatedKey`` until exhausted."""
        documents: list[Document] = []
        while True:
            response = self._call(operation, **params)
            documents.extend(self._deserialize(item) for item in response.get("Items", []))
            if (last_key := response.get("LastEvaluatedKey")) is None:
                return documents
            params = {**params, "ExclusiveStartKey": last_key}

    def _deserialize(self, item: Mapping[str, Any]) -> Document:
        return {name: self._deserializer.deserialize(value) for name, value in item.items()}

    def _call(self, operation: str, **params: Any) -> dict[str, Any]:
        try:
            return getattr(self._client, operation)(**params)
        except (ClientError, BotoCoreError) as e:
            raise StoreUnavailableError(
                f"DynamoDB {operation} on {params.get('TableName')} failed: {e}"
            ) from e
