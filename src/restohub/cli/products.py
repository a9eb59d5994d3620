"""
CLI: ``restohub products``: build and inspect data products.
"""

from __future__ import annotations

from pathlib import Path

import typer

from restohub.cli.utils import (
    DATA_DIR_OPTION,
    JSON_OPTION,
    ORG_OPTION,
    ROLES_OPTION,
    make_context,
    output_result,
    parse_json_option,
)

app = typer.Typer(no_args_is_help=True)


@app.command("build")
def build_product(
    product_type: str = typer.Argument(..., help="menu, occupancy or restaurant"),
    restaurant_id: str = typer.Argument(..., help="Restaurant id"),
    policy: str | None = typer.Option(
        None, "--policy", "-p", help="JSON object merged over the default policy"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview the policy only"),
    data_dir: Path | None = DATA_DIR_OPTION,
    org: str | None = ORG_OPTION,
    roles: str = ROLES_OPTION,
    json_out: bool = JSON_OPTION,
) -> None:
    """Build a data product for a restaurant."""
    from restohub.ops.products import build_product as _build
    from restohub.ops.requests import BuildProductRequest

    overrides = parse_json_option(policy, "--policy")
    ctx = make_context(data_dir, org=org, roles=roles, dry_run=dry_run)
    request = BuildProductRequest(
        product_type=product_type,
        restaurant_id=restaurant_id,
        policy_overrides=overrides,
    )
    output_result(_build(ctx, request), as_json=json_out, title="Data Product")


@app.command("list")
def list_products(
    product_type: str | None = typer.Option(None, "--type", "-t"),
    restaurant_id: str | None = typer.Option(None, "--restaurant"),
    data_dir: Path | None = DATA_DIR_OPTION,
    json_out: bool = JSON_OPTION,
) -> None:
    """List data products."""
    from restohub.ops.products import list_products as _list
    from restohub.ops.requests import ListProductsRequest

    ctx = make_context(data_dir)
    result = _list(ctx, ListProductsRequest(product_type=product_type, restaurant_id=restaurant_id))
    if result.success and not json_out:
        result.data = [_summary(p) for p in result.data or []]
    output_result(result, as_json=json_out, title="Data Products")


@app.command("get")
def get_product(
    product_id: str = typer.Argument(..., help="Product ID"),
    data_dir: Path | None = DATA_DIR_OPTION,
    json_out: bool = JSON_OPTION,
) -> None:
    """Get data product details."""
    from restohub.ops.products import get_product as _get

    ctx = make_context(data_dir)
    output_result(_get(ctx, product_id), as_json=json_out, title="Data Product")


def _summary(product: dict) -> dict:
    metadata = product.get("metadata") or {}
    return {
        "id": product.get("id"),
        "type": product.get("type"),
        "restaurantId": metadata.get("restaurantId"),
        "title": metadata.get("title"),
        "createdByOrg": product.get("createdByOrg"),
        "createdAt": product.get("createdAt"),
    }
