"""
Debug operations: raw views of staging and canonical data.

Staging is scoped to the caller's org when ``ctx.org_id`` is set; canonical
data is shared and can be narrowed by restaurant.
"""

from __future__ import annotations

from typing import Any

from restohub.core.errors import HubError, ValidationError
from restohub.core.logging import get_logger
from restohub.domain.product import ProductType
from restohub.ops.context import OperationContext
from restohub.ops.requests import ListCanonicalRequest, ListStagingRequest
from restohub.ops.result import INTERNAL, OperationResult, start_timer

logger = get_logger(__name__)

CANONICAL_KINDS = tuple(t.value for t in ProductType)


def list_staging(
    ctx: OperationContext,
    request: ListStagingRequest,
) -> OperationResult[dict[str, Any]]:
    """Staging records of one source: ``{source, count, items}``."""
    timer = start_timer()

    try:
        sources = ctx.services.connectors.sources()
        if request.source not in sources:
            raise ValidationError(
                f"source must be one of: {', '.join(sources)}", field="source"
            )
        records = ctx.services.staging.list_by_source(request.source, ctx.org_id)
        return OperationResult.ok(
            {
                "source": request.source,
                "count": len(records),
                "items": [r.to_record() for r in records],
            },
            elapsed_ms=timer.elapsed_ms,
        )
    except HubError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", operation="list_staging", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to list staging: {exc}", elapsed_ms=timer.elapsed_ms)


def list_canonical(
    ctx: OperationContext,
    request: ListCanonicalRequest,
) -> OperationResult[dict[str, Any]]:
    """Canonical records of one kind: ``{type, count, items}``."""
    timer = start_timer()

    try:
        canonical = ctx.services.canonical
        if request.kind == ProductType.MENU.value:
            items = canonical.list_menu_items(request.restaurant_id)
        elif request.kind == ProductType.OCCUPANCY.value:
            items = canonical.list_occupancy_signals(request.restaurant_id)
        elif request.kind == ProductType.RESTAURANT.value:
            items = canonical.list_restaurants(request.restaurant_id)
        else:
            raise ValidationError(
                f"type must be one of: {', '.join(CANONICAL_KINDS)}", field="type"
            )
        return OperationResult.ok(
            {
                "type": request.kind,
                "count": len(items),
                "items": [i.to_record() for i in items],
            },
            elapsed_ms=timer.elapsed_ms,
        )
    except HubError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", operation="list_canonical", error=str(exc))
        return OperationResult.fail(
            INTERNAL,
            f"Failed to list canonical records: {exc}",
            elapsed_ms=timer.elapsed_ms,
        )
