"""Tests for restohub.pipeline.normalizer."""

import pytest

from restohub.connectors import default_connector_registry
from restohub.pipeline.normalizer import NormalizationRunner, NormalizationSummary
from restohub.repositories import CanonicalRepository, StagingRepository


@pytest.fixture()
def staging(memory_store):
    return StagingRepository(memory_store)


@pytest.fixture()
def canonical(memory_store):
    return CanonicalRepository(memory_store)


@pytest.fixture()
def runner(staging, canonical):
    return NormalizationRunner(staging, canonical, default_connector_registry(staging))


class TestNormalizationRunner:
    def test_empty_staging(self, runner):
        assert runner.run() == NormalizationSummary()

    def test_counts_per_kind(self, runner, staging, canonical, menu_payload, occupancy_payload, restaurant_payload):
        staging.append(source="menu", payload=menu_payload)
        staging.append(source="occupancy", payload=occupancy_payload)
        staging.append(source="restaurant", payload=restaurant_payload)

        summary = runner.run()

        assert summary.to_dict() == {
            "processed": 3,
            "menuItemsUpserted": 2,
            "occupancySignalsUpserted": 2,
            "restaurantsUpserted": 1,
            "skipped": 0,
        }
        names = [i.name for i in canonical.list_menu_items("r1")]
        assert names == ["Tortilla", "Gazpacho"]
        assert [s.occupancy_pct for s in canonical.list_occupancy_signals("r1")] == [50, 34]

    def test_idempotent(self, runner, staging, canonical, menu_payload, occupancy_payload):
        staging.append(source="menu", payload=menu_payload)
        staging.append(source="occupancy", payload=occupancy_payload)

        first = runner.run()
        snapshot = (canonical.list_menu_items(), canonical.list_occupancy_signals())
        second = runner.run()

        assert first == second
        assert (canonical.list_menu_items(), canonical.list_occupancy_signals()) == snapshot

    def test_invalid_staging_record_skipped(self, runner, staging, canonical, menu_payload):
        staging.append(source="menu", payload={"restaurantId": "r1", "items": []})
        staging.append(source="menu", payload=menu_payload)

        summary = runner.run()

        assert summary.skipped == 1
        assert summary.processed == 1
        assert len(canonical.list_menu_items()) == 2

    def test_blank_restaurant_name_skipped_rest_of_run_completes(
        self, runner, staging, canonical, menu_payload, restaurant_payload
    ):
        staging.append(source="menu", payload=menu_payload)
        staging.append(source="restaurant", payload={"restaurantId": "r9", "name": "   "})
        staging.append(source="restaurant", payload=restaurant_payload)

        summary = runner.run()

        assert (summary.processed, summary.skipped) == (2, 1)
        assert summary.menu_items_upserted == 2
        assert [p.restaurant_id for p in canonical.list_restaurants()] == ["r1"]

    def test_out_of_range_timestamp_skipped(self, runner, staging, canonical, occupancy_payload):
        poison = {"restaurantId": "r1", "signals": [{"ts": "0001-01-01T00:00:00+01:00", "occupancyPct": 10}]}
        staging.append(source="occupancy", payload=poison)
        staging.append(source="occupancy", payload=occupancy_payload)

        summary = runner.run()

        assert (summary.processed, summary.skipped) == (1, 1)
        assert len(canonical.list_occupancy_signals("r1")) == 2

    def test_poison_records_do_not_block_later_runs(self, runner, staging, canonical, menu_payload):
        staging.append(source="restaurant", payload={"restaurantId": "r9", "name": " "})
        runner.run()
        staging.append(source="menu", payload=menu_payload)

        summary = runner.run()

        assert summary.skipped == 1
        assert len(canonical.list_menu_items()) == 2

    def test_later_record_wins(self, runner, staging, canonical, menu_payload):
        staging.append(source="menu", payload=menu_payload)
        menu_payload["items"][0]["price"] = 7
        staging.append(source="menu", payload=menu_payload)

        summary = runner.run()

        assert summary.menu_items_upserted == 4
        tortilla = next(i for i in canonical.list_menu_items() if i.id == "i1")
        assert tortilla.price == 7

    def test_org_filter(self, runner, staging, canonical, menu_payload):
        staging.append(source="menu", payload=menu_payload, org_id="o1")
        other = {**menu_payload, "restaurantId": "r2"}
        staging.append(source="menu", payload=other, org_id="o2")

        summary = runner.run(org_id="o2")

        assert summary.processed == 1
        assert canonical.list_menu_items("r1") == []
        assert len(canonical.list_menu_items("r2")) == 2

    def test_staging_left_untouched(self, runner, staging, menu_payload):
        staging.append(source="menu", payload=menu_payload)
        before = staging.list()
        runner.run()
        assert staging.list() == before
