"""CLI entry point for Callbot."""

import argparse
import sys

from rich.table import Table

from ..domain.catalog import CatalogError
from ..services.error_mapper import map_exception
from ..services.startup_checks import StartupCheckError
from . import app_runner
from .console import console, err_console
from .logging import log_tui_error, set_log_level


def _report(error: Exception) -> int:
    mapped = map_exception(error)
    log_tui_error("startup_failed", code=mapped.code, error=mapped.message)
    err_console.print(f"[bold red]Error:[/bold red] {mapped.message}")
    if mapped.hint:
        err_console.print(f"[dim]{mapped.hint}[/dim]")
    return 2


def check_catalog(config_path=None) -> int:
    """Lint the catalog; non-zero exit when any action is misconfigured."""
    catalog = app_runner.load_configured_catalog(config_path)
    if not catalog.broken:
        console.print(f"[green]OK[/green] {len(catalog.actions)} action(s), none misconfigured.")
        return 0

    table = Table(title="Misconfigured actions", show_lines=True)
    table.add_column("Action", style="cyan")
    table.add_column("Kind")
    table.add_column("Problems", style="yellow")
    for action_id, problems in catalog.broken.items():
        action = catalog.get(action_id)
        table.add_row(action_id, action.kind.value, "\n".join(problems))
    console.print(table)
    return 1


def main(argv=None):
    parser = argparse.ArgumentParser(description="Callbot - handy scripts launcher")
    parser.add_argument("--config", help="Path to the catalog file (default: callbot.toml)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Force Run to behave like Echo for this session",
    )
    parser.add_argument(
        "--ui",
        choices=["textual", "prompt"],
        default="textual",
        help="Select TUI runtime",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate the catalog and exit",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override CALLBOT_LOG_LEVEL",
    )
    args = parser.parse_args(argv)

    if args.log_level:
        set_log_level(args.log_level)

    try:
        if args.check:
            return check_catalog(args.config)
        app_runner.run(ui=args.ui, config_path=args.config, dry_run=args.dry_run)
    except (StartupCheckError, CatalogError) as exc:
        return _report(exc)
    return 0


if __name__ == "__main__":
    sys.exit(main())
