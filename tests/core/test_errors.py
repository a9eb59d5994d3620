"""Tests for restohub.core.errors module."""

import pydantic
import pytest

from restohub.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    HubError,
    NotFoundError,
    StorageError,
    ValidationError,
)


class _Sample(pydantic.BaseModel):
    name: str
    price: float


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_empty_context_dict(self):
        """Unset fields are dropped."""
        assert ErrorContext().to_dict() == {}

    def test_fields_and_metadata(self):
        """Known fields and metadata are merged into one dict."""
        ctx = ErrorContext(source="menu", org_id="org-1", metadata={"attempt": 2})
        assert ctx.to_dict() == {"source": "menu", "org_id": "org-1", "attempt": 2}


class TestHubError:
    """Test the base error."""

    def test_defaults(self):
        error = HubError("boom")
        assert error.message == "boom"
        assert error.category == ErrorCategory.INTERNAL
        assert error.retryable is False
        assert str(error) == "boom"

    def test_with_context_known_and_unknown_keys(self):
        """Known keys fill the context, the rest go to metadata."""
        error = HubError("boom").with_context(space="gaiax", attempt=3)
        assert error.context.space == "gaiax"
        assert error.context.metadata == {"attempt": 3}

    def test_cause_is_chained(self):
        cause = OSError("disk full")
        error = StorageError("write failed", cause=cause)
        assert error.__cause__ is cause
        assert error.to_dict()["cause"] == "disk full"

    def test_to_dict(self):
        error = NotFoundError.for_key("connector", "pos").with_context(source="pos")
        d = error.to_dict()
        assert d["error_type"] == "NotFoundError"
        assert d["message"] == "No connector registered for 'pos'"
        assert d["category"] == "NOT_FOUND"
        assert d["context"] == {"source": "pos"}


class TestSubclasses:
    """Test category and retryable defaults per subclass."""

    @pytest.mark.parametrize(
        ("error", "category", "retryable"),
        [
            (ValidationError("bad"), ErrorCategory.VALIDATION, False),
            (NotFoundError("missing"), ErrorCategory.NOT_FOUND, False),
            (StorageError("io"), ErrorCategory.STORAGE, True),
            (ConfigError("cfg"), ErrorCategory.CONFIG, False),
        ],
    )
    def test_defaults(self, error, category, retryable):
        assert error.category == category
        assert error.retryable is retryable

    def test_retryable_override(self):
        assert StorageError("io", retryable=False).retryable is False


class TestValidationFromPydantic:
    """ValidationError.from_pydantic keeps every issue."""

    def test_collects_issues(self):
        with pytest.raises(pydantic.ValidationError) as exc_info:
            _Sample.model_validate({"price": "cheap"})

        error = ValidationError.from_pydantic(exc_info.value)
        fields = {issue["field"] for issue in error.issues}
        assert fields == {"name", "price"}
        assert error.field in fields
        assert error.message.startswith(f"{error.field}: ")
        assert error.__cause__ is exc_info.value

    def test_prefix(self):
        with pytest.raises(pydantic.ValidationError) as exc_info:
            _Sample.model_validate({"name": "x", "price": "cheap"})

        error = ValidationError.from_pydantic(exc_info.value, prefix="items.")
        assert error.message.startswith("items.price: ")
        assert error.to_dict()["field"] == "price"

