"""
Operation result envelope.

Provides :class:`OperationResult`: a typed success/failure envelope that
every operation function returns. Unlike ``restohub.core.result.Result`` (a
monadic Ok/Err for internal composition), ``OperationResult`` is designed
for API/CLI consumers and carries *elapsed_ms* and *metadata* alongside
the payload.

Error codes:

====================  =============================================
code                  raised for
====================  =============================================
``VALIDATION_FAILED`` bad caller input (:class:`ValidationError`)
``NOT_FOUND``         unknown source, product or space
``ACCESS_DENIED``     consume refused by policy or product missing
``STORAGE_ERROR``     record store I/O failure (retryable)
``INTERNAL``          anything else
====================  =============================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from restohub.core.errors import ErrorCategory, HubError, ValidationError

VALIDATION_FAILED = "VALIDATION_FAILED"
NOT_FOUND = "NOT_FOUND"
ACCESS_DENIED = "ACCESS_DENIED"
STORAGE_ERROR = "STORAGE_ERROR"
INTERNAL = "INTERNAL"

_CODES_BY_CATEGORY = {
    ErrorCategory.VALIDATION: VALIDATION_FAILED,
    ErrorCategory.NOT_FOUND: NOT_FOUND,
    ErrorCategory.STORAGE: STORAGE_ERROR,
}


@dataclass(frozen=True, slots=True)
class OperationError:
    """Structured error detail for failed operations.

    Attributes:
        code: Machine-readable code (``NOT_FOUND``, ``VALIDATION_FAILED``, …).
        message: Human-readable description of the error.
        category: Optional :class:`ErrorCategory` for routing.
        details: Extra key/value context (field names, issues, etc.).
        retryable: Whether the caller should retry the operation.
    """

    code: str
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Envelope returned by every operation function.

    Factory methods :meth:`ok`, :meth:`fail` and :meth:`from_error` should
    be used instead of the constructor directly.
    """

    success: bool
    data: T | None = None
    error: OperationError | None = None
    elapsed_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(
        cls,
        data: T,
        *,
        elapsed_ms: float = 0.0,
        metadata: dict[str, Any] | None = None,
    ) -> OperationResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data, elapsed_ms=elapsed_ms, metadata=metadata or {})

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
        elapsed_ms: float = 0.0,
        metadata: dict[str, Any] | None = None,
    ) -> OperationResult[T]:
        """Create a failed result."""
        return cls(
            success=False,
            error=OperationError(
                code=code,
                message=message,
                category=category,
                details=details or {},
                retryable=retryable,
            ),
            elapsed_ms=elapsed_ms,
            metadata=metadata or {},
        )

    @classmethod
    def from_error(cls, error: HubError, *, elapsed_ms: float = 0.0) -> OperationResult[T]:
        """Failed result for a :class:`HubError`, coded by its category."""
        details: dict[str, Any] = {}
        if isinstance(error, ValidationError):
            if error.field:
                details["field"] = error.field
            if error.issues:
                details["issues"] = error.issues
        context = error.context.to_dict()
        if context:
            details["context"] = context
        return cls.fail(
            _CODES_BY_CATEGORY.get(error.category, INTERNAL),
            error.message,
            category=error.category,
            details=details,
            retryable=error.retryable,
            elapsed_ms=elapsed_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (for JSON responses)."""
        d: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            d["data"] = self.data
        if self.error is not None:
            d["error"] = {
                "code": self.error.code,
                "message": self.error.message,
                "retryable": self.error.retryable,
            }
            if self.error.details:
                d["error"]["details"] = self.error.details
        if self.elapsed_ms:
            d["elapsed_ms"] = round(self.elapsed_ms, 2)
        if self.metadata:
            d["metadata"] = self.metadata
        return d


# ------------------------------------------------------------------ #
# Timing helper
# ------------------------------------------------------------------ #


class _Timer:
    """Minimal stopwatch for timing operations."""

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000


def start_timer() -> _Timer:
    """Return a lightweight timer. Use ``timer.elapsed_ms`` when done."""
    return _Timer()
