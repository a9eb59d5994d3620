"""Space registry: one :class:`SpaceAdapter` per known space.

Space names are matched after trimming and lowercasing, and each space
also answers to ``<name>-mock``::

    registry.normalize_space(" GaiaX-Mock ")   # -> "gaiax"
    registry.normalize_space("")               # ValidationError
    registry.normalize_space("catalonia")      # NotFoundError
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from restohub.core.errors import NotFoundError, ValidationError
from restohub.repositories.audit import AuditRepository
from restohub.repositories.canonical import CanonicalRepository
from restohub.repositories.published import PublishedRepository
from restohub.spaces.adapter import SpaceAdapter

DEFAULT_SPACES = ("segittur", "gaiax")
MOCK_SUFFIX = "-mock"


class SpaceRegistry:
    def __init__(self, adapters: Iterable[SpaceAdapter] = ()) -> None:
        self._adapters: dict[str, SpaceAdapter] = {}
        for adapter in adapters:
            if adapter.space in self._adapters:
                raise ValueError(f"Space '{adapter.space}' is already registered")
            self._adapters[adapter.space] = adapter

    @classmethod
    def build(
        cls,
        spaces: Iterable[str],
        *,
        published: PublishedRepository,
        audit: AuditRepository,
        canonical: CanonicalRepository,
    ) -> SpaceRegistry:
        return cls(SpaceAdapter(space, published, audit, canonical) for space in spaces)

    def normalize_space(self, name: object) -> str:
        """Canonical space name for ``name``, including ``-mock`` aliases."""
        if not isinstance(name, str):
            raise ValidationError("space must be a string", field="space")
        normalized = name.strip().lower()
        if not normalized:
            raise ValidationError("space must be a non-empty string", field="space")

        if normalized in self._adapters:
            return normalized
        if normalized.endswith(MOCK_SUFFIX):
            base = normalized[: -len(MOCK_SUFFIX)]
            if base in self._adapters:
                return base
        raise NotFoundError(
            f"Space '{name}' not supported", kind="space", key=name
        ).with_context(space=name)

    def get(self, name: str) -> SpaceAdapter:
        return self._adapters[self.normalize_space(name)]

    def names(self) -> list[str]:
        return list(self._adapters)

    def __iter__(self) -> Iterator[SpaceAdapter]:
        return iter(self._adapters.values())

    def __len__(self) -> int:
        return len(self._adapters)
