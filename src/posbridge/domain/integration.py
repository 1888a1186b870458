"""Integration records and their document mapping.

An ``Integration`` is a configured connection between a tenant's
point-of-sale system and the auction platform. Each integration owns zero or
more ``IntegrationConfig`` entries, stored in their own collection and joined
back onto the integration on read.

Stored field names are fixed: ``integrationId``, ``posId``, ``createdAt``,
``lastSync`` and ``integrationConfigId``. Timestamps are stored as ISO-8601
strings in UTC.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

INTEGRATION_ID = "integrationId"
POS_ID = "posId"
CREATED_AT = "createdAt"
LAST_SYNC = "lastSync"
INTEGRATION_CONFIG_ID = "integrationConfigId"


class DocumentMappingError(ValueError):
    """Raised when a stored document cannot be mapped to a domain record."""

    def __init__(self, kind: str, reason: str) -> None:
        super().__init__(f"Cannot map {kind} document: {reason}")
        self.kind = kind
        self.reason = reason


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    # Treat naive as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def _parse_timestamp(kind: str, name: str, raw: Any) -> datetime | None:
    if raw is None or raw == "":
        return None
    if not isinstance(raw, str):
        raise DocumentMappingError(kind, f"{name} must be a string, got {raw!r}")
    try:
        value = datetime.fromisoformat(raw)
    except ValueError as e:
        raise DocumentMappingError(kind, f"{name} is not a timestamp: {raw!r}") from e
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _require_str(kind: str, document: Mapping[str, Any], name: str) -> str:
    value = document.get(name)
    if not isinstance(value, str) or not value:
        raise DocumentMappingError(kind, f"missing {name}")
    return value


@dataclass
class IntegrationConfig:
    """A single configuration entry scoped to one integration.

    Attributes:
        integration_config_id: Primary key of the config.
        integration_id: ID of the owning integration.
        payload: Opaque configuration values stored next to the key fields.
    """

    integration_config_id: str
    integration_id: str
    payload: dict[str, Any] = field(default_factory=dict)

    def to_document(self) -> dict[str, Any]:
        """Render the config as a storable document.

        Key fields win over payload entries that reuse their names.
        """
        return {
            **self.payload,
            INTEGRATION_CONFIG_ID: self.integration_config_id,
            INTEGRATION_ID: self.integration_id,
        }

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> IntegrationConfig:
        """Build a config from a stored document.

        Raises:
            DocumentMappingError: If the document is not a mapping or lacks a key field.
        """
        if not isinstance(document, Mapping):
            raise DocumentMappingError("IntegrationConfig", "document is not a mapping")
        payload = {
            name: value
            for name, value in document.items()
            if name not in (INTEGRATION_CONFIG_ID, INTEGRATION_ID)
        }
        return cls(
            integration_config_id=_require_str(
                "IntegrationConfig", document, INTEGRATION_CONFIG_ID
            ),
            integration_id=_require_str("IntegrationConfig", document, INTEGRATION_ID),
            payload=payload,
        )


@dataclass
class Integration:
    """A point-of-sale integration.

    ``configs`` is a derived view, filled in by the read path from the config
    collection. It is never written back and takes no part in equality.

    Attributes:
        integration_id: Primary key; immutable once saved.
        pos_id: Point-of-sale tenant the integration belongs to (not unique).
        created_at: Set once, on the first save. ``None`` means unset.
        last_sync: Refreshed on every update. ``None`` means unset.
    """

    integration_id: str
    pos_id: str = ""
    created_at: datetime | None = None
    last_sync: datetime | None = None
    _configs: list[IntegrationConfig] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    @property
    def configs(self) -> tuple[IntegrationConfig, ...]:
        """Configs attached by the last read (empty for records never read back)."""
        return tuple(self._configs)

    def attach_configs(self, configs: Iterable[IntegrationConfig]) -> None:
        """Replace the transient configs view."""
        self._configs = list(configs)

    def to_document(self) -> dict[str, Any]:
        """Render the integration as a storable document (configs excluded)."""
        document: dict[str, Any] = {
            INTEGRATION_ID: self.integration_id,
            POS_ID: self.pos_id,
        }
        if (created_at := _format_timestamp(self.created_at)) is not None:
            document[CREATED_AT] = created_at
        if (last_sync := _format_timestamp(self.last_sync)) is not None:
            document[LAST_SYNC] = last_sync
        return document

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> Integration:
        """Build an integration from a stored document.

        Fields other than the four known ones are ignored.

        Raises:
            DocumentMappingError: If the document is malformed.
        """
        if not isinstance(document, Mapping):
            raise DocumentMappingError("Integration", "document is not a mapping")
        pos_id = document.get(POS_ID, "")
        if not isinstance(pos_id, str):
            raise DocumentMappingError("Integration", f"{POS_ID} must be a string")
        return cls(
            integration_id=_require_str("Integration", document, INTEGRATION_ID),
            pos_id=pos_id,
            created_at=_parse_timestamp(
                "Integration", CREATED_AT, document.get(CREATED_AT)
            ),
            last_sync=_parse_timestamp("Integration", LAST_SYNC, document.get(LAST_SYNC)),
        )
