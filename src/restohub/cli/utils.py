"""
CLI utility helpers: output formatting and context creation.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from restohub.core.container import HubServices
from restohub.core.logging import configure_logging
from restohub.core.settings import HubSettings, get_settings
from restohub.ops.context import OperationContext
from restohub.ops.result import OperationResult

console = Console()
err_console = Console(stderr=True)


# ── Shared options ───────────────────────────────────────────────────────

DATA_DIR_OPTION = typer.Option(
    None, "--data-dir", "-d", help="Directory for persisted collections (default from settings)."
)
ORG_OPTION = typer.Option(None, "--org", "-o", help="Caller organisation id.")
ROLES_OPTION = typer.Option("", "--roles", "-r", help="Comma-separated caller roles.")
JSON_OPTION = typer.Option(False, "--json", help="Print raw JSON.")


# ── Context helper ───────────────────────────────────────────────────────


def parse_roles(roles: str | None) -> list[str]:
    return [r.strip() for r in (roles or "").split(",") if r.strip()]


def load_settings(data_dir: Path | None = None) -> HubSettings:
    if data_dir is None:
        return get_settings()
    return HubSettings(data_dir=data_dir)


def make_context(
    data_dir: Path | None = None,
    *,
    org: str | None = None,
    roles: str | None = None,
    dry_run: bool = False,
) -> OperationContext:
    """Create an ``OperationContext`` over file-backed services for CLI commands."""
    settings = load_settings(data_dir)
    configure_logging(level=settings.log_level, json_format=settings.json_logs)
    return OperationContext(
        services=HubServices(settings),
        org_id=org,
        roles=parse_roles(roles),
        caller="cli",
        dry_run=dry_run,
    )


def read_json_file(path: Path) -> Any:
    """Parse ``path`` as JSON or exit with an error message."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        err_console.print(f"[bold red]Cannot read {path}:[/bold red] {e}")
        raise typer.Exit(code=1) from e
    except json.JSONDecodeError as e:
        err_console.print(f"[bold red]Invalid JSON in {path}:[/bold red] {e}")
        raise typer.Exit(code=1) from e


def parse_json_option(value: str | None, name: str) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        err_console.print(f"[bold red]Invalid JSON for {name}:[/bold red] {e}")
        raise typer.Exit(code=1) from e


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json", by_alias=True)
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
    items_key: str | None = None,
) -> None:
    """Render an ``OperationResult`` to the terminal.

    ``items_key`` names a list inside a dict payload that should be shown
    as a table (e.g. ``items`` of the debug views).
    """
    if not result.success:
        err = result.error
        msg = err.message if err else "Unknown error"
        code = err.code if err else "ERROR"
        if as_json:
            console.print_json(json.dumps(result.to_dict(), default=str))
        else:
            err_console.print(f"[bold red]Error[/bold red] ({code}): {escape(msg)}")
        raise typer.Exit(code=1)

    data = result.data

    if as_json:
        payload = [_to_dict(d) for d in data] if isinstance(data, list | tuple) else _to_dict(data)
        console.print_json(json.dumps(payload, default=str))
        return

    if items_key and isinstance(data, dict):
        summary = {k: v for k, v in data.items() if k != items_key}
        _print_dict(summary, title=title)
        data = data.get(items_key) or []

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(_to_dict(data), title=title)


# ── Private helpers ──────────────────────────────────────────────────────


def _cell(value: Any) -> str:
    if isinstance(value, dict | list):
        return escape(json.dumps(value, default=str))
    return "" if value is None else escape(str(value))


def _print_table(items: list, *, title: str = "") -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    rows = [_to_dict(item) for item in items]
    columns = list(dict.fromkeys(col for row in rows for col in row))
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in columns:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(_cell(row.get(col)) for col in columns))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {_cell(v)}")
