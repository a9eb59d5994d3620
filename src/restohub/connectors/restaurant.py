"""Restaurant profile connector."""

from __future__ import annotations

from restohub.connectors.protocol import (
    BaseConnector,
    CanonicalBatch,
    ConnectorContext,
    normalize_string,
    normalize_tags,
)
from restohub.core.timestamps import normalize_iso8601
from restohub.domain.restaurant import RestaurantProfile, RestaurantProfileInput


class RestaurantProfileConnector(BaseConnector):
    id = "restaurant_profile_v1"
    source = "restaurant"
    payload_model = RestaurantProfileInput

    def _canonicalize(self, payload: RestaurantProfileInput, ctx: ConnectorContext) -> CanonicalBatch:
        # the staging receipt time stands in when the producer sends none
        updated_at = payload.updated_at or ctx.received_at
        profile = RestaurantProfile(
            restaurant_id=payload.restaurant_id,
            name=normalize_string(payload.name),
            address=normalize_string(payload.address),
            city=normalize_string(payload.city),
            cuisine=normalize_tags(payload.cuisine),
            capacity_seats=payload.capacity_seats,
            updated_at=normalize_iso8601(updated_at) if updated_at else None,
        )
        return CanonicalBatch(restaurants=[profile])
