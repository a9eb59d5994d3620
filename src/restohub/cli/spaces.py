"""
CLI: ``restohub spaces``: publish and consume data products.
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
)

app = typer.Typer(no_args_is_help=True)


@app.command("publish")
def publish(
    space: str = typer.Argument(..., help="Space name (segittur, gaiax, ...)"),
    product_id: str = typer.Argument(..., help="Product ID"),
    dry_run: bool = typer.Option(False, "--dry-run"),
    data_dir: Path | None = DATA_DIR_OPTION,
    org: str | None = ORG_OPTION,
    roles: str = ROLES_OPTION,
    json_out: bool = JSON_OPTION,
) -> None:
    """Publish a data product into a space."""
    from restohub.ops.requests import PublishRequest
    from restohub.ops.spaces import publish_product

    ctx = make_context(data_dir, org=org, roles=roles, dry_run=dry_run)
    result = publish_product(ctx, PublishRequest(space=space, product_id=product_id))
    output_result(result, as_json=json_out, title="Published")


@app.command("consume")
def consume(
    space: str = typer.Argument(..., help="Space name"),
    product_id: str = typer.Argument(..., help="Product ID"),
    purpose: str = typer.Option(..., "--purpose", "-p", help="Why the data is needed"),
    data_dir: Path | None = DATA_DIR_OPTION,
    org: str | None = ORG_OPTION,
    roles: str = ROLES_OPTION,
    json_out: bool = JSON_OPTION,
) -> None:
    """Consume a published data product."""
    from restohub.ops.requests import ConsumeRequest
    from restohub.ops.spaces import consume_product

    ctx = make_context(data_dir, org=org, roles=roles)
    result = consume_product(
        ctx, ConsumeRequest(space=space, product_id=product_id, purpose=purpose)
    )
    output_result(result, as_json=json_out, title="Consumed")


@app.command("list")
def list_published(
    space: str = typer.Argument(..., help="Space name"),
    data_dir: Path | None = DATA_DIR_OPTION,
    json_out: bool = JSON_OPTION,
) -> None:
    """List products published in a space."""
    from restohub.ops.spaces import list_published as _list

    ctx = make_context(data_dir)
    result = _list(ctx, space)
    if result.success and not json_out:
        result.data = [
            {"id": p.get("id"), "type": p.get("type"), "title": (p.get("metadata") or {}).get("title")}
            for p in result.data or []
        ]
    output_result(result, as_json=json_out, title=f"Published in {space}")
