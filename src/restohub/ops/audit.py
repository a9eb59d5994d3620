"""Audit log query operation."""

from __future__ import annotations

from typing import Any

from restohub.core.errors import HubError, ValidationError
from restohub.core.logging import get_logger
from restohub.core.timestamps import parse_iso8601
from restohub.domain.audit import AuditAction
from restohub.ops.context import OperationContext
from restohub.ops.requests import ListAuditRequest
from restohub.ops.result import INTERNAL, OperationResult, start_timer

logger = get_logger(__name__)


def _check_action(action: str | None) -> AuditAction | None:
    if not action:
        return None
    try:
        return AuditAction(action.upper())
    except ValueError:
        allowed = ", ".join(a.value for a in AuditAction)
        raise ValidationError(
            f"Unknown audit action '{action}' (expected one of: {allowed})", field="action"
        ) from None


def _check_since(since: str | None) -> str | None:
    if not since:
        return None
    try:
        parse_iso8601(since)
    except ValueError:
        raise ValidationError(f"since must be an ISO-8601 timestamp, got {since!r}", field="since") from None
    return since


def list_audit(
    ctx: OperationContext,
    request: ListAuditRequest,
) -> OperationResult[list[dict[str, Any]]]:
    """Audit events in append order, filtered by every field given.

    ``since`` is compared to event timestamps as a string, so it should use
    the same UTC ``...Z`` shape the events are written in.
    """
    timer = start_timer()

    try:
        action = _check_action(request.action)
        since = _check_since(request.since)
        space = ctx.services.spaces.normalize_space(request.space) if request.space else None

        events = ctx.services.audit.list(
            action=action,
            product_id=request.product_id,
            space=space,
            since=since,
        )
        return OperationResult.ok([e.to_record() for e in events], elapsed_ms=timer.elapsed_ms)
    except HubError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", operation="list_audit", error=str(exc))
        return OperationResult.fail(
            INTERNAL,
            f"Failed to list audit events: {exc}",
            elapsed_ms=timer.elapsed_ms,
        )
