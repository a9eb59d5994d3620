"""Tests for the menu, occupancy and restaurant connectors."""

import pytest

from restohub.connectors import (
    Connector,
    ConnectorContext,
    MenuJsonConnector,
    OccupancyEventsConnector,
    RestaurantProfileConnector,
)
from restohub.connectors.protocol import normalize_tags
from restohub.core.errors import ValidationError
from restohub.core.result import Err, Ok
from restohub.domain.restaurant import RestaurantProfile
from restohub.repositories.staging import StagingRepository


@pytest.fixture()
def staging(memory_store) -> StagingRepository:
    return StagingRepository(memory_store)


@pytest.fixture()
def menu(staging) -> MenuJsonConnector:
    return MenuJsonConnector(staging)


@pytest.fixture()
def occupancy(staging) -> OccupancyEventsConnector:
    return OccupancyEventsConnector(staging)


@pytest.fixture()
def restaurant(staging) -> RestaurantProfileConnector:
    return RestaurantProfileConnector(staging)


class TestConnectorProtocol:
    def test_ids_and_sources(self, menu, occupancy, restaurant):
        assert (menu.id, menu.source) == ("menu_json_v1", "menu")
        assert (occupancy.id, occupancy.source) == ("occupancy_events_v1", "occupancy")
        assert (restaurant.id, restaurant.source) == ("restaurant_profile_v1", "restaurant")

    def test_all_satisfy_protocol(self, menu, occupancy, restaurant):
        for connector in (menu, occupancy, restaurant):
            assert isinstance(connector, Connector)

    @pytest.mark.parametrize("raw", [None, [], "menu", 42])
    def test_non_object_payload_is_err(self, menu, raw):
        result = menu.validate(raw)
        assert isinstance(result, Err)
        assert isinstance(result.error, ValidationError)
        assert result.error.message == "menu payload must be a JSON object"


class TestNormalizeTags:
    def test_trim_lower_dedupe_keep_first(self):
        assert normalize_tags([" Gluten", "EGG", "gluten ", "", "  ", "egg"]) == ["gluten", "egg"]

    def test_none(self):
        assert normalize_tags(None) == []


class TestMenuConnector:
    def test_example_tortilla(self, menu):
        """Name trimmed, allergens lowercased."""
        raw = {
            "restaurantId": "r1",
            "items": [{"id": "i1", "name": " Tortilla ", "allergens": ["GLUTEN"], "price": 5, "glutenFree": False}],
        }
        batch = menu.to_canonical(raw, ConnectorContext()).unwrap()
        [item] = batch.menu_items
        assert item.name == "Tortilla"
        assert item.allergens == ["gluten"]
        assert item.currency == "EUR"
        assert batch.occupancy_signals == []

    def test_integer_price_stays_integer(self, menu, menu_payload):
        first, second = menu.to_canonical(menu_payload, ConnectorContext()).unwrap().menu_items
        assert type(first.price) is int
        assert first.to_record()["price"] == 5
        assert type(second.price) is float

    def test_canonicalization(self, menu, menu_payload):
        batch = menu.to_canonical(menu_payload, ConnectorContext()).unwrap()
        first, second = batch.menu_items
        assert first.description == "Spanish omelette"
        assert first.category == "Starters"
        assert first.allergens == ["gluten", "egg"]
        assert second.price == 4.5
        assert second.vegan is True

    def test_deterministic(self, menu, menu_payload):
        ctx = ConnectorContext(org_id="o1")
        assert menu.to_canonical(menu_payload, ctx) == menu.to_canonical(menu_payload, ctx)

    def test_does_not_mutate_input(self, menu, menu_payload):
        snapshot = repr(menu_payload)
        menu.to_canonical(menu_payload, ConnectorContext())
        assert repr(menu_payload) == snapshot

    def test_ingest_stages_record(self, menu, staging, menu_payload):
        ctx = ConnectorContext(org_id="org-1", received_at="2025-01-01T00:00:00.000Z")
        receipt = menu.ingest(menu_payload, ctx).unwrap()
        record = staging.get(receipt.staging_record_id)
        assert record.source == "menu"
        assert record.org_id == "org-1"
        assert record.received_at == receipt.received_at == "2025-01-01T00:00:00.000Z"
        assert record.payload["restaurantId"] == "r1"
        assert record.payload["items"][0]["name"] == " Tortilla "

    def test_ingest_defaults_received_at(self, menu, menu_payload):
        receipt = menu.ingest(menu_payload, ConnectorContext()).unwrap()
        assert receipt.received_at.endswith("Z")
        assert receipt.to_dict() == {
            "stagingRecordId": receipt.staging_record_id,
            "receivedAt": receipt.received_at,
        }

    def test_invalid_payload_not_staged(self, menu, staging):
        result = menu.ingest({"restaurantId": "r1", "items": []}, ConnectorContext())
        assert result.is_err()
        assert result.error.field == "items"
        assert result.error.context.source == "menu"
        assert staging.list_by_source("menu") == []

    def test_default_currency_override(self, staging, menu_payload):
        del menu_payload["currency"]
        connector = MenuJsonConnector(staging, default_currency="GBP")
        batch = connector.to_canonical(menu_payload, ConnectorContext()).unwrap()
        assert {i.currency for i in batch.menu_items} == {"GBP"}


class TestOccupancyConnector:
    def test_example_seats(self, occupancy):
        raw = {
            "restaurantId": "r1",
            "signals": [{"ts": "2025-01-01T00:00:00Z", "occupiedSeats": 25, "capacitySeats": 50}],
        }
        [signal] = occupancy.to_canonical(raw, ConnectorContext()).unwrap().occupancy_signals
        assert signal.occupancy_pct == 50
        assert type(signal.occupancy_pct) is int
        assert signal.ts == "2025-01-01T00:00:00.000Z"

    def test_explicit_pct_rounded_to_integer(self, occupancy, occupancy_payload):
        signals = occupancy.to_canonical(occupancy_payload, ConnectorContext()).unwrap().occupancy_signals
        assert [s.occupancy_pct for s in signals] == [50, 34]
        assert signals[1].ts == "2025-01-01T01:00:00.000Z"

    def test_seats_rounding(self, occupancy):
        raw = {
            "restaurantId": "r1",
            "signals": [{"ts": "2025-01-01T00:00:00Z", "occupiedSeats": 1, "capacitySeats": 3}],
        }
        [signal] = occupancy.to_canonical(raw, ConnectorContext()).unwrap().occupancy_signals
        assert signal.occupancy_pct == 33

    def test_occupied_exceeding_capacity_rejected(self, occupancy):
        raw = {
            "restaurantId": "r1",
            "signals": [
                {"ts": "2025-01-01T00:00:00Z", "occupancyPct": 10},
                {"ts": "2025-01-01T01:00:00Z", "occupiedSeats": 60, "capacitySeats": 50},
            ],
        }
        match occupancy.validate(raw):
            case Err(error):
                assert error.message == "Signal 1: occupiedSeats cannot exceed capacitySeats"
                assert error.field == "signals.1.occupiedSeats"
            case Ok():
                pytest.fail("expected validation to fail")

    def test_missing_pct_and_seats_rejected(self, occupancy):
        raw = {"restaurantId": "r1", "signals": [{"ts": "2025-01-01T00:00:00Z"}]}
        assert occupancy.validate(raw).is_err()

    @pytest.mark.parametrize("ts", ["0001-01-01T00:00:00+01:00", "2025-01-01", "2025-01-01T00:00:00"])
    def test_unusable_timestamp_rejected(self, occupancy, ts):
        raw = {"restaurantId": "r1", "signals": [{"ts": ts, "occupancyPct": 10}]}
        match occupancy.to_canonical(raw, ConnectorContext()):
            case Err(error):
                assert isinstance(error, ValidationError)
                assert error.field == "signals.0.ts"
            case Ok():
                pytest.fail("expected the timestamp to be rejected")


class TestRestaurantConnector:
    def test_canonicalization(self, restaurant, restaurant_payload):
        [profile] = restaurant.to_canonical(restaurant_payload, ConnectorContext()).unwrap().restaurants
        assert profile.name == "Casa Pepe"
        assert profile.city == "Madrid"
        assert profile.cuisine == ["spanish", "tapas"]
        assert profile.updated_at == "2025-01-01T10:00:00.000Z"

    def test_updated_at_falls_back_to_received_at(self, restaurant, restaurant_payload):
        del restaurant_payload["updatedAt"]
        ctx = ConnectorContext(received_at="2025-02-01T00:00:00.000Z")
        [profile] = restaurant.to_canonical(restaurant_payload, ctx).unwrap().restaurants
        assert profile.updated_at == "2025-02-01T00:00:00.000Z"

    def test_name_required(self, restaurant):
        assert restaurant.validate({"restaurantId": "r1"}).is_err()

    def test_blank_name_rejected(self, restaurant):
        result = restaurant.validate({"restaurantId": "r1", "name": "   "})
        assert result.is_err()
        assert result.error.field == "name"
        assert result.error.context.source == "restaurant"


class _EmptyNameConnector(RestaurantProfileConnector):
    def _canonicalize(self, payload, ctx):
        RestaurantProfile(restaurant_id=payload.restaurant_id, name="")


class _OverflowConnector(RestaurantProfileConnector):
    def _canonicalize(self, payload, ctx):
        raise OverflowError("date value out of range")


class TestCanonicalizationFailures:
    """Errors raised while mapping a valid payload come back as Err."""

    def test_model_error_becomes_validation_error(self, staging, restaurant_payload):
        result = _EmptyNameConnector(staging).to_canonical(restaurant_payload, ConnectorContext())
        assert isinstance(result.error, ValidationError)
        assert result.error.field == "name"
        assert result.error.context.source == "restaurant"

    def test_overflow_becomes_validation_error(self, staging, restaurant_payload):
        result = _OverflowConnector(staging).to_canonical(restaurant_payload, ConnectorContext())
        assert isinstance(result.error, ValidationError)
        assert "out of range" in result.error.message
        assert isinstance(result.error.__cause__, OverflowError)

    def test_invalid_payload_short_circuits(self, staging):
        result = _OverflowConnector(staging).to_canonical({"restaurantId": "r1"}, ConnectorContext())
        assert result.error.field == "name"
