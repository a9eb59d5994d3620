"""
CLI: ``restohub debug``: raw staging and canonical views.
"""

from __future__ import annotations

from pathlib import Path

import typer

from restohub.cli.utils import DATA_DIR_OPTION, JSON_OPTION, ORG_OPTION, make_context, output_result

app = typer.Typer(no_args_is_help=True)


@app.command("staging")
def staging(
    source: str = typer.Argument(..., help="menu, occupancy or restaurant"),
    data_dir: Path | None = DATA_DIR_OPTION,
    org: str | None = ORG_OPTION,
    json_out: bool = JSON_OPTION,
) -> None:
    """Show staging records of one source."""
    from restohub.ops.debug import list_staging
    from restohub.ops.requests import ListStagingRequest

    ctx = make_context(data_dir, org=org)
    result = list_staging(ctx, ListStagingRequest(source=source))
    output_result(result, as_json=json_out, title="Staging", items_key="items")


@app.command("canonical")
def canonical(
    kind: str = typer.Argument(..., help="menu, occupancy or restaurant"),
    restaurant_id: str | None = typer.Option(None, "--restaurant"),
    data_dir: Path | None = DATA_DIR_OPTION,
    json_out: bool = JSON_OPTION,
) -> None:
    """Show canonical records of one kind."""
    from restohub.ops.debug import list_canonical
    from restohub.ops.requests import ListCanonicalRequest

    ctx = make_context(data_dir)
    result = list_canonical(ctx, ListCanonicalRequest(kind=kind, restaurant_id=restaurant_id))
    output_result(result, as_json=json_out, title="Canonical", items_key="items")
