"""Tests for restohub.spaces.registry."""

import pytest

from restohub.core.errors import NotFoundError, ValidationError
from restohub.repositories import AuditRepository, CanonicalRepository, PublishedRepository
from restohub.spaces.registry import DEFAULT_SPACES, SpaceRegistry


@pytest.fixture()
def registry(memory_store):
    return SpaceRegistry.build(
        DEFAULT_SPACES,
        published=PublishedRepository(memory_store),
        audit=AuditRepository(memory_store),
        canonical=CanonicalRepository(memory_store),
    )


class TestSpaceRegistry:
    def test_names(self, registry):
        assert registry.names() == ["segittur", "gaiax"]
        assert len(registry) == 2

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("gaiax", "gaiax"), (" GaiaX ", "gaiax"), ("segittur-mock", "segittur"), ("SEGITTUR-MOCK", "segittur")],
    )
    def test_normalize(self, registry, raw, expected):
        assert registry.normalize_space(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_blank_space(self, registry, raw):
        with pytest.raises(ValidationError, match="non-empty"):
            registry.normalize_space(raw)

    def test_non_string_space(self, registry):
        with pytest.raises(ValidationError, match="must be a string"):
            registry.normalize_space(7)

    @pytest.mark.parametrize("raw", ["catalonia", "-mock", "mock-gaiax"])
    def test_unknown_space(self, registry, raw):
        with pytest.raises(NotFoundError, match="not supported"):
            registry.normalize_space(raw)

    def test_get_returns_adapter(self, registry):
        assert registry.get("gaiax-mock").space == "gaiax"

    def test_duplicate_space_rejected(self, memory_store):
        with pytest.raises(ValueError):
            SpaceRegistry.build(
                ["gaiax", "gaiax"],
                published=PublishedRepository(memory_store),
                audit=AuditRepository(memory_store),
                canonical=CanonicalRepository(memory_store),
            )
