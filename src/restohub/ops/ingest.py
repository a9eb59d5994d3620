"""
Ingest operation.

Resolves the connector for ``request.source``, validates the body and
appends one staging record. Nothing is normalized here; see
:mod:`restohub.ops.normalize`.
"""

from __future__ import annotations

from typing import Any

from restohub.connectors.protocol import ConnectorContext
from restohub.core.errors import HubError
from restohub.core.logging import LogContext, get_logger
from restohub.ops.context import OperationContext
from restohub.ops.requests import IngestRequest
from restohub.ops.result import INTERNAL, OperationResult, start_timer

logger = get_logger(__name__)


def ingest(ctx: OperationContext, request: IngestRequest) -> OperationResult[dict[str, Any]]:
    """Validate and stage a raw payload.

    Returns ``{source, stagingRecordId, receivedAt}``. With ``dry_run`` the
    payload is only validated and nothing is written.
    """
    timer = start_timer()

    with LogContext(**ctx.log_fields()):
        try:
            connector = ctx.services.connectors.get(request.source)

            if ctx.dry_run:
                connector.validate(request.body).unwrap()
                return OperationResult.ok(
                    {"source": connector.source, "dryRun": True},
                    elapsed_ms=timer.elapsed_ms,
                )

            receipt = connector.ingest(request.body, ConnectorContext(org_id=ctx.org_id)).unwrap()
            return OperationResult.ok(
                {"source": connector.source, **receipt.to_dict()},
                elapsed_ms=timer.elapsed_ms,
            )
        except HubError as exc:
            logger.info("op_rejected", operation="ingest", source=request.source, error=exc.message)
            return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
        except Exception as exc:
            logger.exception("op_failed", operation="ingest", error=str(exc))
            return OperationResult.fail(INTERNAL, f"Ingest failed: {exc}", elapsed_ms=timer.elapsed_ms)
