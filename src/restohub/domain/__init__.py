"""Domain records for the restohub pipeline."""

from restohub.domain.audit import AuditAction, AuditEvent, Decision
from restohub.domain.menu import MenuIngestPayload, MenuItem, MenuItemInput
from restohub.domain.occupancy import (
    OccupancyIngestPayload,
    OccupancySignal,
    OccupancySignalInput,
)
from restohub.domain.policy import AccessPolicy, Identity
from restohub.domain.product import DataProduct, PayloadRef, ProductMetadata, ProductType
from restohub.domain.restaurant import RestaurantProfile, RestaurantProfileInput
from restohub.domain.staging import StagingRecord

__all__ = [
    "AccessPolicy",
    "AuditAction",
    "AuditEvent",
    "DataProduct",
    "Decision",
    "Identity",
    "MenuIngestPayload",
    "MenuItem",
    "MenuItemInput",
    "OccupancyIngestPayload",
    "OccupancySignal",
    "OccupancySignalInput",
    "PayloadRef",
    "ProductMetadata",
    "ProductType",
    "RestaurantProfile",
    "RestaurantProfileInput",
    "StagingRecord",
]
