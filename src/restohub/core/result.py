"""
Result envelope for consistent success/failure handling.

Connectors return ``Ok(parsed)`` or ``Err(ValidationError)`` rather than
raising, so the normalizer can skip one bad staging record and keep going,
and the operation layer can branch without exceptions as control flow.

Manifesto:
    - **Explicit over implicit:** A failed validation is a value the caller
      must look at
    - **Composable:** ``flat_map`` chains parse → canonicalize steps and
      ``map_err`` rewraps whatever a step raised

Examples:
    >>> from restohub.core.result import Ok, Err, Result
    >>> def parse_pct(value: float) -> Result[float]:
    ...     if not 0 <= value <= 100:
    ...         return Err(ValueError("out of range"))
    ...     return Ok(value)
    >>> parse_pct(42).flat_map(lambda v: try_result(lambda: round(v))).unwrap()
    42
    >>> parse_pct(120).is_err()
    True

    Pattern matching:

    >>> match parse_pct(50):
    ...     case Ok(value):
    ...         print(f"pct={value}")
    ...     case Err(error):
    ...         print(f"bad: {error}")
    pct=50

Tags:
    result-pattern, error-handling, functional-programming, restohub
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    Examples:
        >>> Ok(5).flat_map(lambda x: Err(ValueError("nope"))).is_err()
        True
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    ``flat_map`` passes the error through unchanged; ``unwrap`` re-raises it.

    Examples:
        >>> Err(ValueError("x")).flat_map(lambda v: Ok(v * 2)).is_err()
        True
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the contained error."""
        raise self.error

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        return self  # type: ignore[return-value]

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform the error (e.g. wrap it with more context)."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


def try_result(f: Callable[[], T]) -> Result[T]:
    """
    Run ``f`` and capture any exception as ``Err``.

    Examples:
        >>> try_result(lambda: int("7")).unwrap()
        7
        >>> try_result(lambda: int("x")).is_err()
        True
    """
    try:
        return Ok(f())
    except Exception as e:
        return Err(e)


__all__ = [
    "Ok",
    "Err",
    "Result",
    "try_result",
]
