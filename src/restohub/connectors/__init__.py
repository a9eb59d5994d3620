"""Source connectors and the connector registry."""

from restohub.connectors.menu import MenuJsonConnector
from restohub.connectors.occupancy import OccupancyEventsConnector
from restohub.connectors.protocol import (
    BaseConnector,
    CanonicalBatch,
    Connector,
    ConnectorContext,
    IngestReceipt,
)
from restohub.connectors.registry import ConnectorRegistry, default_connector_registry
from restohub.connectors.restaurant import RestaurantProfileConnector

__all__ = [
    "BaseConnector",
    "CanonicalBatch",
    "Connector",
    "ConnectorContext",
    "ConnectorRegistry",
    "IngestReceipt",
    "MenuJsonConnector",
    "OccupancyEventsConnector",
    "RestaurantProfileConnector",
    "default_connector_registry",
]
