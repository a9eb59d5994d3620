"""
Data product model.

A product never embeds canonical data: ``payload_ref`` names the canonical
source and restaurant, and the payload is resolved again at consume time.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import Field

from restohub.domain.base import HubModel, NonEmptyStr
from restohub.domain.policy import AccessPolicy


class ProductType(str, Enum):
    MENU = "menu"
    OCCUPANCY = "occupancy"
    RESTAURANT = "restaurant"


class ProductMetadata(HubModel):
    title: NonEmptyStr
    granularity: NonEmptyStr
    latency: NonEmptyStr
    restaurant_id: NonEmptyStr | None = None


class PayloadRef(HubModel):
    kind: Literal["normalized"] = "normalized"
    source: ProductType
    restaurant_id: NonEmptyStr


class DataProduct(HubModel):
    id: NonEmptyStr
    type: ProductType
    version: NonEmptyStr
    # "schema" shadows a BaseModel attribute, hence the explicit alias
    schema_: dict[str, Any] = Field(alias="schema")
    metadata: ProductMetadata
    policy: AccessPolicy
    created_by_org: NonEmptyStr
    created_at: NonEmptyStr
    payload_ref: PayloadRef | None = None
