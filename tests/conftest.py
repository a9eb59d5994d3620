"""
Shared pytest fixtures for restohub tests.

This module provides:
- In-memory and tmp_path-backed record stores
- A services container and operation contexts over memory storage
- Sample raw payloads for every connector source

Usage:
    def test_ingest(services, menu_payload):
        services.connectors.get("menu").ingest(menu_payload, ConnectorContext())
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

from restohub.core.container import HubServices
from restohub.core.settings import clear_settings_cache
from restohub.core.storage import JsonFileStore, MemoryStore
from restohub.domain.policy import Identity
from restohub.ops.context import OperationContext

MENU_PAYLOAD: dict[str, Any] = {
    "restaurantId": "r1",
    "currency": "EUR",
    "items": [
        {
            "id": "i1",
            "name": " Tortilla ",
            "description": "Spanish omelette ",
            "price": 5,
            "category": " Starters",
            "allergens": ["GLUTEN", " egg ", "gluten", ""],
            "glutenFree": False,
            "vegan": False,
        },
        {
            "id": "i2",
            "name": "Gazpacho",
            "price": 4.5,
            "allergens": [],
            "glutenFree": True,
            "vegan": True,
        },
    ],
}

OCCUPANCY_PAYLOAD: dict[str, Any] = {
    "restaurantId": "r1",
    "signals": [
        {"ts": "2025-01-01T00:00:00Z", "occupiedSeats": 25, "capacitySeats": 50},
        {"ts": "2025-01-01T02:00:00+01:00", "occupancyPct": 33.5},
    ],
}

RESTAURANT_PAYLOAD: dict[str, Any] = {
    "restaurantId": "r1",
    "name": " Casa Pepe ",
    "address": "Calle Mayor 1",
    "city": "Madrid ",
    "cuisine": ["Spanish", " tapas", "spanish"],
    "capacitySeats": 50,
    "updatedAt": "2025-01-01T10:00:00Z",
}


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep tests away from ~/.restohub and any developer .env."""
    monkeypatch.setenv("RESTOHUB_DATA_DIR", str(tmp_path / "default-data"))
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def file_store(tmp_path: Path) -> JsonFileStore:
    """JSON file store rooted in a per-test temporary directory."""
    return JsonFileStore(tmp_path / "data")


@pytest.fixture()
def services() -> HubServices:
    """Services container over a fresh in-memory store."""
    return HubServices.in_memory()


@pytest.fixture()
def ctx(services: HubServices) -> OperationContext:
    """Operation context for a destination org."""
    return OperationContext(
        services=services,
        org_id="org-dest",
        roles=["destination"],
        caller="test",
    )


@pytest.fixture()
def dry_ctx(services: HubServices) -> OperationContext:
    """Operation context with dry_run=True."""
    return OperationContext(services=services, org_id="org-dest", caller="test", dry_run=True)


@pytest.fixture()
def identity() -> Identity:
    return Identity(org_id="org-producer", roles=["restaurant"])


@pytest.fixture()
def menu_payload() -> dict[str, Any]:
    return copy.deepcopy(MENU_PAYLOAD)


@pytest.fixture()
def occupancy_payload() -> dict[str, Any]:
    return copy.deepcopy(OCCUPANCY_PAYLOAD)


@pytest.fixture()
def restaurant_payload() -> dict[str, Any]:
    return copy.deepcopy(RESTAURANT_PAYLOAD)
