"""
Lazy-initialised services container.

:class:`HubServices` wires the record store, the repositories, the
connector registry, the normalization runner, the product builder and the
space registry from one :class:`HubSettings`. Components are created on
first access and shared afterwards.

Usage::

    from restohub.core.container import HubServices

    services = HubServices()                 # settings from environment
    services.connectors.get("menu")          # lazy-created

    services = HubServices.in_memory()       # for tests and dry runs
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from restohub.core.errors import ConfigError
from restohub.core.logging import get_logger
from restohub.core.settings import HubSettings, StorageBackend, get_settings
from restohub.core.storage import JsonFileStore, MemoryStore, RecordStore

if TYPE_CHECKING:
    from restohub.connectors.registry import ConnectorRegistry
    from restohub.pipeline.normalizer import NormalizationRunner
    from restohub.products.builder import DataProductBuilder
    from restohub.repositories import (
        AuditRepository,
        CanonicalRepository,
        DataProductRepository,
        PublishedRepository,
        StagingRepository,
    )
    from restohub.spaces.registry import SpaceRegistry

logger = get_logger(__name__)


def create_store(settings: HubSettings) -> RecordStore:
    """Record store for the configured backend."""
    if settings.storage_backend is StorageBackend.MEMORY:
        return MemoryStore()
    if settings.storage_backend is StorageBackend.FILE:
        return JsonFileStore(settings.data_dir)
    raise ConfigError(f"Unsupported storage backend: {settings.storage_backend!r}")


class HubServices:
    """Lazy-initialised dependency container."""

    def __init__(
        self,
        settings: HubSettings | None = None,
        *,
        store: RecordStore | None = None,
    ) -> None:
        self._settings = settings
        self._store = store
        self._components: dict[str, Any] = {}

    @classmethod
    def in_memory(cls, **overrides: Any) -> HubServices:
        """Container over a fresh :class:`MemoryStore`."""
        settings = HubSettings(storage_backend=StorageBackend.MEMORY, **overrides)
        return cls(settings, store=MemoryStore())

    def _lazy(self, name: str, factory: Any) -> Any:
        if name not in self._components:
            self._components[name] = factory()
        return self._components[name]

    # ── Properties (lazy) ────────────────────────────────────────

    @property
    def settings(self) -> HubSettings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def store(self) -> RecordStore:
        if self._store is None:
            self._store = create_store(self.settings)
            logger.debug("store_created", backend=self.settings.storage_backend.value)
        return self._store

    @property
    def staging(self) -> StagingRepository:
        from restohub.repositories import StagingRepository

        return self._lazy("staging", lambda: StagingRepository(self.store))

    @property
    def canonical(self) -> CanonicalRepository:
        from restohub.repositories import CanonicalRepository

        return self._lazy("canonical", lambda: CanonicalRepository(self.store))

    @property
    def products(self) -> DataProductRepository:
        from restohub.repositories import DataProductRepository

        return self._lazy("products", lambda: DataProductRepository(self.store))

    @property
    def published(self) -> PublishedRepository:
        from restohub.repositories import PublishedRepository

        return self._lazy("published", lambda: PublishedRepository(self.store))

    @property
    def audit(self) -> AuditRepository:
        from restohub.repositories import AuditRepository

        return self._lazy("audit", lambda: AuditRepository(self.store))

    @property
    def connectors(self) -> ConnectorRegistry:
        from restohub.connectors.registry import default_connector_registry

        return self._lazy(
            "connectors",
            lambda: default_connector_registry(
                self.staging, default_currency=self.settings.default_currency
            ),
        )

    @property
    def normalizer(self) -> NormalizationRunner:
        from restohub.pipeline.normalizer import NormalizationRunner

        return self._lazy(
            "normalizer",
            lambda: NormalizationRunner(self.staging, self.canonical, self.connectors),
        )

    @property
    def builder(self) -> DataProductBuilder:
        from restohub.products.builder import DataProductBuilder

        return self._lazy(
            "builder",
            lambda: DataProductBuilder(
                self.canonical,
                self.products,
                default_retention_days=self.settings.default_retention_days,
            ),
        )

    @property
    def spaces(self) -> SpaceRegistry:
        from restohub.spaces.registry import SpaceRegistry

        return self._lazy(
            "spaces",
            lambda: SpaceRegistry.build(
                self.settings.spaces,
                published=self.published,
                audit=self.audit,
                canonical=self.canonical,
            ),
        )
