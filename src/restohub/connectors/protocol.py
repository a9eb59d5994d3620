"""
Connector contract for raw data sources.

A connector owns one source label (``menu``, ``occupancy``, ``restaurant``)
and knows three things about it: how to validate a raw payload, how to
stage it, and how to map it to canonical records.

Design Principles:
- Protocol over inheritance: anything with ``id``, ``source``,
  ``validate``, ``ingest`` and ``to_canonical`` is a connector
- Results, not exceptions: bad input comes back as ``Err(ValidationError)``
- Pure canonicalization: ``to_canonical`` has no side effects and returns
  equal output for equal input, because normalization replays staging
  on every run

Usage:
    from restohub.connectors import MenuJsonConnector

    connector = MenuJsonConnector(staging)
    match connector.ingest(body, ConnectorContext(org_id="org-1")):
        case Ok(receipt):
            print(receipt.staging_record_id)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Protocol, runtime_checkable

import pydantic

from restohub.core.errors import ValidationError
from restohub.core.logging import get_logger
from restohub.core.result import Err, Ok, Result, try_result
from restohub.core.timestamps import utc_now_iso
from restohub.domain.base import HubModel
from restohub.domain.menu import MenuItem
from restohub.domain.occupancy import OccupancySignal
from restohub.domain.restaurant import RestaurantProfile
from restohub.repositories.staging import StagingRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConnectorContext:
    """Who sent the payload and when it arrived."""

    org_id: str | None = None
    received_at: str | None = None


@dataclass(frozen=True)
class IngestReceipt:
    staging_record_id: str
    received_at: str

    def to_dict(self) -> dict[str, Any]:
        return {"stagingRecordId": self.staging_record_id, "receivedAt": self.received_at}


@dataclass
class CanonicalBatch:
    """Canonical records derived from one payload. Unused kinds stay empty."""

    menu_items: list[MenuItem] = field(default_factory=list)
    occupancy_signals: list[OccupancySignal] = field(default_factory=list)
    restaurants: list[RestaurantProfile] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.menu_items) + len(self.occupancy_signals) + len(self.restaurants)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.menu_items:
            result["menuItems"] = [i.to_record() for i in self.menu_items]
        if self.occupancy_signals:
            result["occupancySignals"] = [s.to_record() for s in self.occupancy_signals]
        if self.restaurants:
            result["restaurants"] = [p.to_record() for p in self.restaurants]
        return result


@runtime_checkable
class Connector(Protocol):
    """Protocol every source connector satisfies."""

    @property
    def id(self) -> str: ...

    @property
    def source(self) -> str: ...

    def validate(self, raw: Any) -> Result[Any]: ...

    def ingest(self, raw: Any, ctx: ConnectorContext) -> Result[IngestReceipt]: ...

    def to_canonical(self, raw: Any, ctx: ConnectorContext) -> Result[CanonicalBatch]: ...


class BaseConnector:
    """
    Shared validate/ingest/to_canonical flow.

    Subclasses set ``id``, ``source`` and ``payload_model`` and implement
    :meth:`_canonicalize`. :meth:`_check` adds rules the schema cannot
    express.
    """

    id: ClassVar[str]
    source: ClassVar[str]
    payload_model: ClassVar[type[HubModel]]

    def __init__(self, staging: StagingRepository) -> None:
        self.staging = staging

    def validate(self, raw: Any) -> Result[Any]:
        if not isinstance(raw, Mapping):
            return Err(ValidationError(
                f"{self.source} payload must be a JSON object"
            ).with_context(source=self.source))
        try:
            payload = self.payload_model.model_validate(dict(raw))
        except pydantic.ValidationError as e:
            return Err(ValidationError.from_pydantic(e).with_context(source=self.source))
        return self._check(payload)

    def ingest(self, raw: Any, ctx: ConnectorContext) -> Result[IngestReceipt]:
        """Validate and append one staging record tagged with this source."""
        match self.validate(raw):
            case Err() as err:
                logger.info("ingest_rejected", source=self.source, reason=err.error.message)
                return err
            case Ok(payload):
                received_at = ctx.received_at or utc_now_iso()
                record_id = self.staging.append(
                    source=self.source,
                    payload=payload.to_payload(),
                    org_id=ctx.org_id,
                    received_at=received_at,
                )
                logger.info("ingest_staged", source=self.source, staging_record_id=record_id)
                return Ok(IngestReceipt(staging_record_id=record_id, received_at=received_at))

    def to_canonical(self, raw: Any, ctx: ConnectorContext) -> Result[CanonicalBatch]:
        """Map a payload to canonical records; nothing here raises for bad data."""
        return self.validate(raw).flat_map(
            lambda payload: try_result(
                lambda: self._canonicalize(payload, ctx)
            ).map_err(self._canonical_error)
        )

    def _check(self, payload: Any) -> Result[Any]:
        return Ok(payload)

    def _canonicalize(self, payload: Any, ctx: ConnectorContext) -> CanonicalBatch:
        raise NotImplementedError

    def _canonical_error(self, error: Exception) -> Exception:
        if isinstance(error, pydantic.ValidationError):
            return ValidationError.from_pydantic(error).with_context(source=self.source)
        if isinstance(error, (ValueError, OverflowError)):
            return ValidationError(
                f"{self.source} record cannot be canonicalized: {error}", cause=error
            ).with_context(source=self.source)
        return error

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r}, source={self.source!r})"


def normalize_string(value: str | None) -> str | None:
    return value.strip() if isinstance(value, str) else value


def normalize_tags(tags: list[str] | None) -> list[str]:
    """Trim and lowercase tags, drop empties and repeats (first one wins)."""
    seen: dict[str, None] = {}
    for tag in tags or []:
        if not isinstance(tag, str):
            continue
        cleaned = tag.strip().lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)
