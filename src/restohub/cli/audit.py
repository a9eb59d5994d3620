"""
CLI: ``restohub audit``: query the audit log.
"""

from __future__ import annotations

from pathlib import Path

import typer

from restohub.cli.utils import DATA_DIR_OPTION, JSON_OPTION, make_context, output_result

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_audit(
    action: str | None = typer.Option(None, "--action", "-a", help="PUBLISH or CONSUME"),
    product_id: str | None = typer.Option(None, "--product"),
    space: str | None = typer.Option(None, "--space", "-s"),
    since: str | None = typer.Option(None, "--since", help="ISO-8601 lower bound on ts"),
    data_dir: Path | None = DATA_DIR_OPTION,
    json_out: bool = JSON_OPTION,
) -> None:
    """List audit events."""
    from restohub.ops.audit import list_audit as _list
    from restohub.ops.requests import ListAuditRequest

    ctx = make_context(data_dir)
    request = ListAuditRequest(action=action, product_id=product_id, space=space, since=since)
    output_result(_list(ctx, request), as_json=json_out, title="Audit Log")
