"""
Space operations: publish and consume data products.

Space names go through :meth:`SpaceRegistry.normalize_space`, so
``gaiax-mock`` reaches the ``gaiax`` space. A consume refused by policy
(or for a product that is not published in the space) fails with
``ACCESS_DENIED`` and the refusal reason as message; it is audited either
way.
"""

from __future__ import annotations

from typing import Any

from restohub.core.errors import HubError, ValidationError
from restohub.core.logging import LogContext, get_logger
from restohub.ops.context import OperationContext
from restohub.ops.requests import ConsumeRequest, PublishRequest
from restohub.ops.result import ACCESS_DENIED, INTERNAL, NOT_FOUND, OperationResult, start_timer
from restohub.spaces.adapter import REASON_PURPOSE_REQUIRED, ConsumeDenied

logger = get_logger(__name__)


def publish_product(
    ctx: OperationContext,
    request: PublishRequest,
) -> OperationResult[dict[str, Any]]:
    """Publish a stored product into a space. Returns ``{space, productId}``."""
    timer = start_timer()

    with LogContext(space=request.space, **ctx.log_fields()):
        try:
            adapter = ctx.services.spaces.get(request.space)
            if not request.product_id:
                raise ValidationError("productId required", field="productId")

            product = ctx.services.products.get(request.product_id)
            if product is None:
                return OperationResult.fail(
                    NOT_FOUND,
                    "Data product not found",
                    details={"productId": request.product_id},
                    elapsed_ms=timer.elapsed_ms,
                )

            if ctx.dry_run:
                return OperationResult.ok(
                    {"dryRun": True, "space": adapter.space, "productId": product.id},
                    elapsed_ms=timer.elapsed_ms,
                )

            receipt = adapter.publish(product, ctx.actor)
            return OperationResult.ok(
                {"space": adapter.space, "productId": receipt.id},
                elapsed_ms=timer.elapsed_ms,
            )
        except HubError as exc:
            logger.info("op_rejected", operation="publish", error=exc.message)
            return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
        except Exception as exc:
            logger.exception("op_failed", operation="publish", error=str(exc))
            return OperationResult.fail(INTERNAL, f"Publish failed: {exc}", elapsed_ms=timer.elapsed_ms)


def consume_product(
    ctx: OperationContext,
    request: ConsumeRequest,
) -> OperationResult[dict[str, Any]]:
    """Consume a published product for ``request.purpose``.

    Returns ``{dataProduct, payload}`` on success. Consume is always
    performed, even with ``dry_run``: the attempt itself is what the
    audit trail records. A missing purpose is audited too, once the space
    resolves; an unknown space has no audit trail to write to.
    """
    timer = start_timer()

    with LogContext(space=request.space, **ctx.log_fields()):
        try:
            adapter = ctx.services.spaces.get(request.space)
            if not request.purpose:
                adapter.reject_consume(
                    request.product_id, ctx.actor, request.purpose, REASON_PURPOSE_REQUIRED
                )
                raise ValidationError(REASON_PURPOSE_REQUIRED, field="purpose")

            outcome = adapter.consume(request.product_id, ctx.actor, request.purpose)
            if isinstance(outcome, ConsumeDenied):
                return OperationResult.fail(
                    ACCESS_DENIED,
                    outcome.reason,
                    details={"productId": request.product_id, "space": adapter.space},
                    elapsed_ms=timer.elapsed_ms,
                )
            return OperationResult.ok(outcome.to_dict(), elapsed_ms=timer.elapsed_ms)
        except HubError as exc:
            logger.info("op_rejected", operation="consume", error=exc.message)
            return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
        except Exception as exc:
            logger.exception("op_failed", operation="consume", error=str(exc))
            return OperationResult.fail(INTERNAL, f"Consume failed: {exc}", elapsed_ms=timer.elapsed_ms)


def list_published(ctx: OperationContext, space: str) -> OperationResult[list[dict[str, Any]]]:
    """Products currently published in ``space``."""
    timer = start_timer()

    try:
        adapter = ctx.services.spaces.get(space)
        return OperationResult.ok(
            [p.to_record() for p in adapter.list_published()],
            elapsed_ms=timer.elapsed_ms,
        )
    except HubError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", operation="list_published", error=str(exc))
        return OperationResult.fail(
            INTERNAL,
            f"Failed to list published products: {exc}",
            elapsed_ms=timer.elapsed_ms,
        )
