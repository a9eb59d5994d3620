"""restohub core -- errors, results, logging, settings and storage.

Architecture::

    errors.py       HubError hierarchy (ValidationError, NotFoundError, ...)
    result.py       Result[T] envelope (Ok / Err / try_result)
    logging.py      structlog configuration + LogContext
    timestamps.py   UTC ISO-8601 helpers
    settings.py     HubSettings (pydantic-settings, RESTOHUB_ env prefix)
    storage.py      RecordStore protocol, JsonFileStore, MemoryStore
    container.py    HubServices lazy dependency container
"""

from restohub.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    HubError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from restohub.core.result import Err, Ok, Result, try_result

__all__ = [
    "ConfigError",
    "Err",
    "ErrorCategory",
    "ErrorContext",
    "HubError",
    "NotFoundError",
    "Ok",
    "Result",
    "StorageError",
    "ValidationError",
    "try_result",
]
