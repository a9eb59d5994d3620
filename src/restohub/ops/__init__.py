"""
Operations layer: the external interface of restohub.

- All functions accept ``OperationContext`` as first argument
- All functions return ``OperationResult[T]`` (never raise)
- All functions are transport-agnostic (no HTTP, no CLI knowledge)

Usage::

    from restohub.core.container import HubServices
    from restohub.ops import OperationContext
    from restohub.ops.ingest import ingest
    from restohub.ops.requests import IngestRequest

    ctx = OperationContext(services=HubServices(), org_id="org-1")
    result = ingest(ctx, IngestRequest(source="menu", body=payload))
    assert result.success
"""

from restohub.ops.context import OperationContext
from restohub.ops.result import OperationError, OperationResult

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
]
