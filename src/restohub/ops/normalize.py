"""Normalization operation."""

from __future__ import annotations

from typing import Any

from restohub.core.errors import HubError
from restohub.core.logging import LogContext, get_logger
from restohub.ops.context import OperationContext
from restohub.ops.result import INTERNAL, OperationResult, start_timer

logger = get_logger(__name__)


def run_normalization(ctx: OperationContext) -> OperationResult[dict[str, Any]]:
    """Replay staging into the canonical store.

    Scoped to ``ctx.org_id`` when the caller has one. With ``dry_run`` only
    the number of staged records per source is reported.
    """
    timer = start_timer()
    services = ctx.services

    with LogContext(**ctx.log_fields()):
        try:
            if ctx.dry_run:
                staged = {
                    source: len(services.staging.list_by_source(source, ctx.org_id))
                    for source in services.connectors.sources()
                }
                return OperationResult.ok(
                    {"dryRun": True, "staged": staged},
                    elapsed_ms=timer.elapsed_ms,
                )

            summary = services.normalizer.run(ctx.org_id)
            return OperationResult.ok(summary.to_dict(), elapsed_ms=timer.elapsed_ms)
        except HubError as exc:
            logger.warning("op_rejected", operation="normalize", error=exc.message)
            return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
        except Exception as exc:
            logger.exception("op_failed", operation="normalize", error=str(exc))
            return OperationResult.fail(
                INTERNAL,
                f"Normalization failed: {exc}",
                elapsed_ms=timer.elapsed_ms,
            )
