"""Connector registry: resolves a connector by its source label.

Registries are built explicitly and passed to whoever needs them; there is
no module-level registry to mutate.

Usage:
    registry = default_connector_registry(staging)
    connector = registry.get("menu")
    registry.get("pos")   # raises NotFoundError
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from restohub.connectors.menu import MenuJsonConnector
from restohub.connectors.occupancy import OccupancyEventsConnector
from restohub.connectors.protocol import Connector
from restohub.connectors.restaurant import RestaurantProfileConnector
from restohub.core.errors import NotFoundError
from restohub.core.logging import get_logger
from restohub.domain.menu import DEFAULT_CURRENCY
from restohub.repositories.staging import StagingRepository

logger = get_logger(__name__)


class ConnectorRegistry:
    """Connectors keyed by ``source``, in registration order."""

    def __init__(self, connectors: Iterable[Connector] = ()) -> None:
        self._by_source: dict[str, Connector] = {}
        for connector in connectors:
            self.register(connector)

    def register(self, connector: Connector) -> None:
        if not isinstance(connector, Connector):
            raise TypeError(f"{connector!r} does not implement the Connector protocol")
        if not connector.id or not connector.source:
            raise ValueError("Connector id and source must be non-empty")
        if connector.source in self._by_source:
            raise ValueError(f"Connector for source '{connector.source}' is already registered")
        self._by_source[connector.source] = connector
        logger.debug("connector_registered", source=connector.source, connector_id=connector.id)

    def get(self, source: str) -> Connector:
        try:
            return self._by_source[source]
        except KeyError:
            raise NotFoundError.for_key("connector", source).with_context(source=source) from None

    def sources(self) -> list[str]:
        return list(self._by_source)

    def __contains__(self, source: object) -> bool:
        return source in self._by_source

    def __iter__(self) -> Iterator[Connector]:
        return iter(self._by_source.values())

    def __len__(self) -> int:
        return len(self._by_source)


def default_connector_registry(
    staging: StagingRepository,
    *,
    default_currency: str = DEFAULT_CURRENCY,
) -> ConnectorRegistry:
    """The standard connector set: menu, occupancy, restaurant."""
    return ConnectorRegistry([
        MenuJsonConnector(staging, default_currency=default_currency),
        OccupancyEventsConnector(staging),
        RestaurantProfileConnector(staging),
    ])
