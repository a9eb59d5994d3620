"""
Data product operations.

Build, list and fetch data products. Products are returned in their
persisted camelCase shape.
"""

from __future__ import annotations

from typing import Any

from restohub.core.errors import HubError
from restohub.core.logging import LogContext, get_logger
from restohub.ops.context import OperationContext
from restohub.ops.requests import BuildProductRequest, ListProductsRequest
from restohub.ops.result import INTERNAL, NOT_FOUND, OperationResult, start_timer
from restohub.products.builder import merge_policy, parse_product_type

logger = get_logger(__name__)


def build_product(
    ctx: OperationContext,
    request: BuildProductRequest,
) -> OperationResult[dict[str, Any]]:
    """Build and store a new data product owned by the caller's org."""
    timer = start_timer()

    with LogContext(**ctx.log_fields()):
        try:
            if ctx.dry_run:
                ptype = parse_product_type(request.product_type)
                policy = merge_policy(
                    request.policy_overrides,
                    ctx.services.settings.default_retention_days,
                )
                return OperationResult.ok(
                    {
                        "dryRun": True,
                        "type": ptype.value,
                        "restaurantId": request.restaurant_id,
                        "policy": policy.to_record(),
                    },
                    elapsed_ms=timer.elapsed_ms,
                )

            product = ctx.services.builder.build(
                request.product_type,
                request.restaurant_id,
                ctx.actor,
                request.policy_overrides,
            )
            return OperationResult.ok(product.to_record(), elapsed_ms=timer.elapsed_ms)
        except HubError as exc:
            logger.info("op_rejected", operation="build_product", error=exc.message)
            return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
        except Exception as exc:
            logger.exception("op_failed", operation="build_product", error=str(exc))
            return OperationResult.fail(
                INTERNAL,
                f"Failed to build product: {exc}",
                elapsed_ms=timer.elapsed_ms,
            )


def list_products(
    ctx: OperationContext,
    request: ListProductsRequest,
) -> OperationResult[list[dict[str, Any]]]:
    """List stored products, optionally by type and restaurant."""
    timer = start_timer()

    try:
        product_type = parse_product_type(request.product_type) if request.product_type else None
        products = ctx.services.products.list(
            product_type=product_type,
            restaurant_id=request.restaurant_id,
        )
        return OperationResult.ok([p.to_record() for p in products], elapsed_ms=timer.elapsed_ms)
    except HubError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", operation="list_products", error=str(exc))
        return OperationResult.fail(
            INTERNAL,
            f"Failed to list products: {exc}",
            elapsed_ms=timer.elapsed_ms,
        )


def get_product(ctx: OperationContext, product_id: str) -> OperationResult[dict[str, Any]]:
    """Get a single product by ID."""
    timer = start_timer()

    try:
        product = ctx.services.products.get(product_id)
        if product is None:
            return OperationResult.fail(
                NOT_FOUND,
                f"Data product '{product_id}' not found",
                elapsed_ms=timer.elapsed_ms,
            )
        return OperationResult.ok(product.to_record(), elapsed_ms=timer.elapsed_ms)
    except HubError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", operation="get_product", error=str(exc))
        return OperationResult.fail(
            INTERNAL,
            f"Failed to get product: {exc}",
            elapsed_ms=timer.elapsed_ms,
        )
