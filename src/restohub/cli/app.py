"""
Root Typer application for the restohub CLI.

``ingest`` and ``normalize`` live on the root app; products, spaces,
audit and debug views are sub-apps.
"""

from __future__ import annotations

from pathlib import Path

import typer
from typer import Typer

from restohub.cli.utils import (
    DATA_DIR_OPTION,
    JSON_OPTION,
    ORG_OPTION,
    ROLES_OPTION,
    make_context,
    output_result,
    read_json_file,
)

app = Typer(
    name="restohub",
    help="restohub: governed restaurant data products.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from restohub import __version__

        typer.echo(f"restohub {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """restohub CLI: ingest, normalize, build, publish and consume."""


# ── Pipeline commands ────────────────────────────────────────────────────


@app.command("ingest")
def ingest(
    source: str = typer.Argument(..., help="Source label: menu, occupancy or restaurant"),
    file: Path = typer.Argument(..., help="JSON payload file"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Validate only"),
    data_dir: Path | None = DATA_DIR_OPTION,
    org: str | None = ORG_OPTION,
    roles: str = ROLES_OPTION,
    json_out: bool = JSON_OPTION,
) -> None:
    """Validate a raw payload and append it to staging."""
    from restohub.ops.ingest import ingest as _ingest
    from restohub.ops.requests import IngestRequest

    body = read_json_file(file)
    ctx = make_context(data_dir, org=org, roles=roles, dry_run=dry_run)
    result = _ingest(ctx, IngestRequest(source=source, body=body))
    output_result(result, as_json=json_out, title="Staged")


@app.command("normalize")
def normalize(
    dry_run: bool = typer.Option(False, "--dry-run", help="Only count staged records"),
    data_dir: Path | None = DATA_DIR_OPTION,
    org: str | None = ORG_OPTION,
    roles: str = ROLES_OPTION,
    json_out: bool = JSON_OPTION,
) -> None:
    """Replay staging into the canonical store."""
    from restohub.ops.normalize import run_normalization

    ctx = make_context(data_dir, org=org, roles=roles, dry_run=dry_run)
    output_result(run_normalization(ctx), as_json=json_out, title="Normalization")


# ── Sub-command registration ─────────────────────────────────────────────

from restohub.cli.audit import app as audit_app  # noqa: E402
from restohub.cli.debug import app as debug_app  # noqa: E402
from restohub.cli.products import app as products_app  # noqa: E402
from restohub.cli.spaces import app as spaces_app  # noqa: E402

app.add_typer(products_app, name="products", help="Build and inspect data products.")
app.add_typer(spaces_app, name="spaces", help="Publish and consume in spaces.")
app.add_typer(audit_app, name="audit", help="Audit log.")
app.add_typer(debug_app, name="debug", help="Raw staging and canonical views.")
