"""``slana doctor`` — validate a host project without running anything.

Loads the inventory and package manifest, then resolves and registers
every command exactly as a real invocation would, and renders one Rich
table row per check.  No executor is called.
"""

from __future__ import annotations

from rich.markup import escape
from rich.table import Table

from slana.cli import exit_codes
from slana.cli.console import err_console
from slana.cli.dispatcher import register_commands
from slana.cli.parser import build_parser, initialize_cli
from slana.config import Settings
from slana.core.models import CliConfig, CommandSpec, Inventory
from slana.core.options import flag_hint
from slana.core.resolver import parse_command
from slana.exceptions import MissingCommandNameError, SlanaError
from slana.infra.executor_loader import FileExecutorLoader
from slana.infra.inventory_loader import load_inventory
from slana.version import __version__

OK: str = "[green]OK[/green]"
FAIL: str = "[red]FAIL[/red]"

Row = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

def _failure(label: str, exc: SlanaError) -> Row:
    detail = str(exc) if not exc.hint else f"{exc}\n{exc.hint}"
    return label, escape(detail), FAIL


def _inventory_check(settings: Settings) -> tuple[Row, Inventory | None]:
    label = "Inventory"
    try:
        inventory = load_inventory(settings.working_dir, file_name=settings.inventory_file)
    except SlanaError as exc:
        return _failure(label, exc), None
    value = f"{inventory.name} ({len(inventory.commands)} command(s))"
    return (label, escape(value), OK), inventory


def _package_check(inventory: Inventory, settings: Settings) -> tuple[Row, CliConfig | None]:
    label = "Package"
    try:
        config = initialize_cli(inventory, settings.working_dir, package_file=settings.package_file)
    except SlanaError as exc:
        return _failure(label, exc), None
    return (label, escape(f"{config.prog} v{config.version}"), OK), config


def _command_check(spec: CommandSpec, config: CliConfig, settings: Settings) -> Row:
    label = spec.name or "<unnamed>"
    try:
        if not spec.name:
            raise MissingCommandNameError(
                "Make sure each command in your command inventory has a name",
            )
        resolved = parse_command(spec, config, settings.working_dir, FileExecutorLoader())
        register_commands(build_parser(config), config, [resolved])
    except SlanaError as exc:
        return _failure(f"command {label}", exc)

    hints = " ".join(flag_hint(option) for option in resolved.options.values())
    value = f"{spec.executor}" + (f"\n{hints}" if hints else "")
    return f"command {label}", escape(value), OK


def collect_checks(settings: Settings) -> list[Row]:
    """Run every check for *settings* and return the table rows."""
    rows: list[Row] = [("slana", __version__, OK)]

    inventory_row, inventory = _inventory_check(settings)
    rows.append(inventory_row)
    if inventory is None:
        return rows

    package_row, config = _package_check(inventory, settings)
    rows.append(package_row)
    if config is None:
        # commands can still be checked against a provisional parser
        config = CliConfig(
            prog=inventory.name,
            usage=f"{inventory.name} <command> [options]",
            version="0.0.0",
            epilog="",
        )

    rows.extend(_command_check(spec, config, settings) for spec in inventory.commands)
    return rows


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings) -> int:
    """Render the diagnostics table for *settings*.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when every check passes,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    rows = collect_checks(settings)
    has_failure = any(status == FAIL for _, _, status in rows)

    table = Table(
        title=f"slana doctor: {escape(str(settings.working_dir))}",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Check", style="bold", min_width=12)
    table.add_column("Detail", min_width=24)
    table.add_column("Status", justify="center", min_width=6)
    for label, value, status in rows:
        table.add_row(escape(label), value, status)

    console = err_console()
    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS

