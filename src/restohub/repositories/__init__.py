"""Collection-backed repositories, one per logical collection."""

from restohub.repositories.audit import AuditRepository
from restohub.repositories.base import CollectionRepository
from restohub.repositories.canonical import CanonicalRepository
from restohub.repositories.products import DataProductRepository
from restohub.repositories.published import PublishedRepository
from restohub.repositories.staging import StagingRepository

__all__ = [
    "AuditRepository",
    "CanonicalRepository",
    "CollectionRepository",
    "DataProductRepository",
    "PublishedRepository",
    "StagingRepository",
]
