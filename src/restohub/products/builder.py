"""
Data product builder.

Packages the canonical data of one restaurant into a governed
:class:`~restohub.domain.product.DataProduct`. The product holds a pointer
(``payloadRef``) to the canonical source, never a copy: consumers always
get the data as it is at consume time.

Each build creates a new product with a fresh id. Building twice for the
same restaurant yields two products.

Policy:
    The default policy is merged with the caller's overrides and ``pii``
    is then forced to ``False`` whatever the overrides say. Override keys
    that are not policy fields are dropped; a known key with a wrong type
    fails the build with :class:`ValidationError`.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import pydantic

from restohub.core.errors import ValidationError
from restohub.core.logging import get_logger
from restohub.core.timestamps import utc_now_iso
from restohub.domain.policy import DEFAULT_RETENTION_DAYS, AccessPolicy, Identity, default_policy
from restohub.domain.product import DataProduct, PayloadRef, ProductMetadata, ProductType
from restohub.repositories.canonical import CanonicalRepository
from restohub.repositories.products import DataProductRepository

logger = get_logger(__name__)

PRODUCT_VERSION = "v1"

MENU_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "restaurantId": {"type": "string"},
        "name": {"type": "string"},
        "description": {"type": "string"},
        "price": {"type": "number"},
        "currency": {"type": "string"},
        "category": {"type": "string"},
        "allergens": {"type": "array", "items": {"type": "string"}},
        "glutenFree": {"type": "boolean"},
        "vegan": {"type": "boolean"},
    },
}

OCCUPANCY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "restaurantId": {"type": "string"},
        "ts": {"type": "string", "format": "date-time"},
        "occupancyPct": {"type": "number", "minimum": 0, "maximum": 100},
    },
}

RESTAURANT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "restaurantId": {"type": "string"},
        "name": {"type": "string"},
        "address": {"type": "string"},
        "city": {"type": "string"},
        "cuisine": {"type": "array", "items": {"type": "string"}},
        "capacitySeats": {"type": "integer", "minimum": 0},
        "updatedAt": {"type": "string", "format": "date-time"},
    },
}


@dataclass(frozen=True)
class ProductTemplate:
    """Per-type schema and metadata defaults."""

    schema: dict[str, Any]
    title_prefix: str
    granularity: str
    latency: str

    def title_for(self, restaurant_id: str) -> str:
        return f"{self.title_prefix} {restaurant_id}"


PRODUCT_TEMPLATES: dict[ProductType, ProductTemplate] = {
    ProductType.MENU: ProductTemplate(MENU_SCHEMA, "Menu for", "daily", "1h"),
    ProductType.OCCUPANCY: ProductTemplate(OCCUPANCY_SCHEMA, "Occupancy for", "hourly", "5m"),
    ProductType.RESTAURANT: ProductTemplate(
        RESTAURANT_SCHEMA, "Restaurant profile for", "static", "24h"
    ),
}


def parse_product_type(value: ProductType | str) -> ProductType:
    try:
        return ProductType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in ProductType)
        raise ValidationError(
            f"Unknown product type '{value}' (expected one of: {allowed})", field="type"
        ) from None


def merge_policy(
    overrides: Mapping[str, Any] | None,
    retention_days: float = DEFAULT_RETENTION_DAYS,
) -> AccessPolicy:
    """Default policy with ``overrides`` applied and ``pii`` forced off."""
    if overrides is not None and not isinstance(overrides, Mapping):
        raise ValidationError("policyOverrides must be an object", field="policyOverrides")

    merged = default_policy(retention_days)
    for key, value in (overrides or {}).items():
        # accept snake_case spellings too
        alias = AccessPolicy.model_fields[key].alias if key in AccessPolicy.model_fields else key
        if alias in merged:
            merged[alias] = value
    merged["pii"] = False

    try:
        return AccessPolicy.model_validate(merged)
    except pydantic.ValidationError as e:
        raise ValidationError.from_pydantic(e, prefix="policyOverrides.") from e


class DataProductBuilder:
    def __init__(
        self,
        canonical: CanonicalRepository,
        products: DataProductRepository,
        *,
        default_retention_days: float = DEFAULT_RETENTION_DAYS,
    ) -> None:
        self.canonical = canonical
        self.products = products
        self.default_retention_days = default_retention_days

    def build(
        self,
        product_type: ProductType | str,
        restaurant_id: str,
        identity: Identity,
        policy_overrides: Mapping[str, Any] | None = None,
    ) -> DataProduct:
        """Create, store and return a new product for ``restaurant_id``.

        Raises:
            ValidationError: unknown type, empty restaurant id or bad overrides.
        """
        ptype = parse_product_type(product_type)
        if not restaurant_id or not restaurant_id.strip():
            raise ValidationError("restaurantId is required", field="restaurantId")

        template = PRODUCT_TEMPLATES[ptype]
        policy = merge_policy(policy_overrides, self.default_retention_days)

        product = DataProduct(
            id=str(uuid.uuid4()),
            type=ptype,
            version=PRODUCT_VERSION,
            schema=template.schema,
            metadata=ProductMetadata(
                title=template.title_for(restaurant_id),
                granularity=template.granularity,
                latency=template.latency,
                restaurant_id=restaurant_id,
            ),
            policy=policy,
            created_by_org=identity.org_id,
            created_at=utc_now_iso(),
            payload_ref=PayloadRef(source=ptype, restaurant_id=restaurant_id),
        )
        self.products.upsert(product)

        logger.info(
            "product_built",
            product_id=product.id,
            product_type=ptype.value,
            restaurant_id=restaurant_id,
            canonical_count=self._canonical_count(ptype, restaurant_id),
        )
        return product

    def _canonical_count(self, ptype: ProductType, restaurant_id: str) -> int:
        if ptype is ProductType.MENU:
            return len(self.canonical.list_menu_items(restaurant_id))
        if ptype is ProductType.OCCUPANCY:
            return len(self.canonical.list_occupancy_signals(restaurant_id))
        return len(self.canonical.list_restaurants(restaurant_id))
