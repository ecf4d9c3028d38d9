"""Resource lookup CLI commands.

Builds a router from a layout file and queries it.

Commands:
    resolve KEY  -- Print the value a key resolves to
    keys         -- List every key in enumeration order
    origin       -- Show where each enumerated key resolves from
"""

import json as json_lib
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bundle_router.config import LAYOUT_ENV_VAR, load_router, resolve_layout_path
from bundle_router.exceptions import LayoutError, NotFound
from bundle_router.origin import collect_origins
from bundle_router.router import PrefixRouter

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="bundle-router",
    help="Query prefix-routed resource bundles",
    add_completion=False,
)
console = Console(width=120)

_LAYOUT_HELP = f"Layout file (defaults to ${LAYOUT_ENV_VAR})"


def _load_router_or_exit(layout: Optional[Path]) -> PrefixRouter:
    """Build the router from the layout file or exit with an error."""
    layout_path = resolve_layout_path(layout)
    if layout_path is None:
        console.print(f"[red]Error: No layout file. Pass --layout or set {LAYOUT_ENV_VAR}.[/red]")
        raise typer.Exit(1)

    logger.debug("Loading layout from %s", layout_path)
    try:
        return load_router(layout_path)
    except LayoutError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc


@app.command()
def resolve(
    key: str = typer.Argument(..., help="Fully-qualified resource key"),
    layout: Optional[Path] = typer.Option(None, "--layout", "-l", help=_LAYOUT_HELP),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON (machine-parseable)",
    ),
) -> None:
    """Print the value KEY resolves to."""
    router = _load_router_or_exit(layout)

    try:
        result = router.resolve_origin(key)
    except NotFound as exc:
        if json_output:
            print(json_lib.dumps({"key": key, "error": str(exc)}, indent=2))
        else:
            console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    # JSON output for scripting (use print() to avoid Rich markup)
    if json_output:
        output = {
            "key": result.key,
            "value": result.value,
            "tier": result.tier.value,
            "prefix": result.prefix,
            "lookup_key": result.lookup_key,
            "position": result.position,
        }
        print(json_lib.dumps(output, indent=2))
        return

    print(result.value)


@app.command("keys")
def list_keys(
    layout: Optional[Path] = typer.Option(None, "--layout", "-l", help=_LAYOUT_HELP),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON (machine-parseable)",
    ),
) -> None:
    """List every key, defaults first, then prefix groups."""
    router = _load_router_or_exit(layout)

    if json_output:
        print(json_lib.dumps(list(router.keys()), indent=2))
        return

    for key in router.keys():
        print(key)


@app.command()
def origin(
    layout: Optional[Path] = typer.Option(None, "--layout", "-l", help=_LAYOUT_HELP),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON (machine-parseable)",
    ),
) -> None:
    """Show which prefix group or default store each key resolves from."""
    router = _load_router_or_exit(layout)
    entries = collect_origins(router)

    if not entries:
        if json_output:
            print("[]")
        else:
            console.print("[dim]No keys found[/dim]")
        return

    if json_output:
        output = [
            {
                "key": entry.key,
                "value": entry.value,
                "tier": entry.tier,
                "prefix": entry.prefix,
                "position": entry.position,
                "error": entry.error,
            }
            for entry in entries
        ]
        print(json_lib.dumps(output, indent=2))
        return

    table = Table(title="Resource Origins")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_column("Tier", style="cyan")
    table.add_column("Prefix", style="yellow")
    table.add_column("Store", justify="right")

    for entry in entries:
        if entry.error:
            table.add_row(escape(entry.key), f"[red]{escape(entry.error)}[/red]", "-", "-", "-")
            continue

        value = entry.value or ""
        if len(value) > 60:
            value = value[:60] + "..."

        table.add_row(
            escape(entry.key),
            escape(value),
            entry.tier or "-",
            entry.prefix or "-",
            str(entry.position),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(entries)} key(s)[/dim]")
