"""
Structured error types for restohub.

Every fault raised inside the hub is a :class:`HubError` carrying a
category, a retry hint, structured context and an optional chained cause.
Callers at the operation boundary map categories onto result codes instead
of inspecting exception messages.

Manifesto:
    - **Typed hierarchy:** One subclass per failure kind the pipeline knows
    - **Business outcomes are not faults:** A policy denial is a value
      (see :mod:`restohub.governance.evaluator`), never an exception
    - **Rich context:** Errors carry source, org and key metadata for logs
    - **Chaining:** The original exception survives as ``cause``

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                        HubError                           │
        │  (category, retryable, context, cause)                    │
        ├──────────────────────────────────────────────────────────┤
        │  ValidationError     NotFoundError      StorageError      │
        │  (VALIDATION)        (NOT_FOUND)        (STORAGE)         │
        │                                                           │
        │  ConfigError                                              │
        │  (CONFIG)                                                 │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> err = ValidationError("restaurantId is required", field="restaurantId")
    >>> err.category
    <ErrorCategory.VALIDATION: 'VALIDATION'>
    >>> err.retryable
    False

    >>> NotFoundError.for_key("connector", "pos").message
    "No connector registered for 'pos'"

Tags:
    error-handling, exception-hierarchy, error-context, restohub
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    The operation layer turns each category into a stable result code
    (``VALIDATION`` → ``VALIDATION_FAILED`` and so on), so adding a category
    means adding a code in :mod:`restohub.ops.result` as well.
    """

    VALIDATION = "VALIDATION"     # Malformed or incomplete caller input
    NOT_FOUND = "NOT_FOUND"       # Unknown source, connector, product, space
    STORAGE = "STORAGE"           # Disk / record store failures
    CONFIG = "CONFIG"             # Missing or invalid settings
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only the fields relevant to the failure need to be set; ``to_dict()``
    drops anything left as ``None``.

    Examples:
        >>> ErrorContext(source="menu", org_id="org-1").to_dict()
        {'source': 'menu', 'org_id': 'org-1'}
    """

    source: str | None = None
    org_id: str | None = None
    space: str | None = None
    product_id: str | None = None
    collection: str | None = None
    request_id: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["source", "org_id", "space", "product_id", "collection", "request_id"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class HubError(Exception):
    """
    Base exception for all restohub errors.

    Subclasses set ``default_category`` and ``default_retryable``; both can
    be overridden per instance.

    Examples:
        >>> error = HubError("unexpected state")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(source="menu").context.source
        'menu'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> HubError:
        """
        Add context to this error (fluent API).

        Usage:
            raise StorageError("write failed").with_context(collection="audit")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(HubError):
    """
    Caller input failed a schema or business rule.

    Never retryable: the payload must be fixed. ``issues`` keeps the
    individual problems (one dict per failing field) when the failure came
    from a schema check that found several at once.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        issues: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.issues = issues or []

    @classmethod
    def from_pydantic(cls, exc: Any, *, prefix: str = "") -> ValidationError:
        """Build from a ``pydantic.ValidationError``, keeping every issue."""
        issues = []
        for item in exc.errors(include_url=False, include_context=False, include_input=False):
            loc = ".".join(str(part) for part in item.get("loc", ()))
            issues.append({"field": loc, "message": item.get("msg", "")})
        first = issues[0] if issues else {"field": None, "message": str(exc)}
        message = f"{first['field']}: {first['message']}" if first["field"] else first["message"]
        if prefix:
            message = f"{prefix}{message}"
        return cls(message, field=first["field"], issues=issues, cause=exc)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.issues:
            result["issues"] = self.issues
        return result


# =============================================================================
# LOOKUP ERRORS
# =============================================================================


class NotFoundError(HubError):
    """Unknown source, connector, product or space."""

    default_category = ErrorCategory.NOT_FOUND
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        kind: str | None = None,
        key: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.kind = kind
        self.key = key

    @classmethod
    def for_key(cls, kind: str, key: str) -> NotFoundError:
        return cls(f"No {kind} registered for '{key}'", kind=kind, key=key)


# =============================================================================
# STORAGE / CONFIG ERRORS
# =============================================================================


class StorageError(HubError):
    """
    Record store I/O failure.

    The whole request may be retried by the caller: writes are atomic
    per collection and upserts are idempotent at the natural-key level.
    """

    default_category = ErrorCategory.STORAGE
    default_retryable = True


class ConfigError(HubError):
    """Missing or invalid configuration."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "HubError",
    "ValidationError",
    "NotFoundError",
    "StorageError",
    "ConfigError",
]
