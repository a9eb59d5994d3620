"""Canonical repository: deduplicated normalized records.

Natural keys:

==========================  ===========================
collection                  key
==========================  ===========================
``canonical-menu``          ``(restaurantId, id)``
``canonical-occupancy``     ``(restaurantId, ts)``
``canonical-restaurant``    ``(restaurantId,)``
==========================  ===========================

Upserting unchanged data rewrites identical records and still reports
them as upserted.
"""

from __future__ import annotations

from collections.abc import Iterable

from restohub.core.logging import get_logger
from restohub.domain.menu import MenuItem
from restohub.domain.occupancy import OccupancySignal
from restohub.domain.restaurant import RestaurantProfile
from restohub.repositories.base import CollectionRepository

logger = get_logger(__name__)


def _menu_key(r: dict) -> tuple:
    return (r.get("restaurantId"), r.get("id"))


def _occupancy_key(r: dict) -> tuple:
    return (r.get("restaurantId"), r.get("ts"))


def _restaurant_key(r: dict) -> tuple:
    return (r.get("restaurantId"),)


class CanonicalRepository(CollectionRepository):
    MENU = "canonical-menu"
    OCCUPANCY = "canonical-occupancy"
    RESTAURANT = "canonical-restaurant"

    # -- menu ------------------------------------------------------------------

    def upsert_menu_items(self, items: Iterable[MenuItem]) -> int:
        count = self._upsert(self.MENU, (i.to_record() for i in items), _menu_key)
        logger.debug("canonical_upserted", collection=self.MENU, count=count)
        return count

    def list_menu_items(self, restaurant_id: str | None = None) -> list[MenuItem]:
        return [
            MenuItem.from_record(r)
            for r in self._load(self.MENU)
            if not restaurant_id or r.get("restaurantId") == restaurant_id
        ]

    # -- occupancy -------------------------------------------------------------

    def upsert_occupancy_signals(self, signals: Iterable[OccupancySignal]) -> int:
        count = self._upsert(self.OCCUPANCY, (s.to_record() for s in signals), _occupancy_key)
        logger.debug("canonical_upserted", collection=self.OCCUPANCY, count=count)
        return count

    def list_occupancy_signals(self, restaurant_id: str | None = None) -> list[OccupancySignal]:
        return [
            OccupancySignal.from_record(r)
            for r in self._load(self.OCCUPANCY)
            if not restaurant_id or r.get("restaurantId") == restaurant_id
        ]

    # -- restaurant profiles ---------------------------------------------------

    def upsert_restaurants(self, profiles: Iterable[RestaurantProfile]) -> int:
        count = self._upsert(
            self.RESTAURANT,
            (p.to_record() for p in profiles),
            _restaurant_key,
            move_to_end=True,
        )
        logger.debug("canonical_upserted", collection=self.RESTAURANT, count=count)
        return count

    def list_restaurants(self, restaurant_id: str | None = None) -> list[RestaurantProfile]:
        """Profiles in write order; the last one is the most recently upserted."""
        return [
            RestaurantProfile.from_record(r)
            for r in self._load(self.RESTAURANT)
            if not restaurant_id or r.get("restaurantId") == restaurant_id
        ]
