"""Process boundary for slana.

Two entry points live here:

* :func:`run` — called from a host tool's executable script.  Loads the
  inventory from the working directory, binds it to the package
  manifest and dispatches ``sys.argv``.
* :func:`cli` — the ``slana`` console script (``slana exec`` /
  ``slana doctor``), wrapped in the same kind of error boundary.

Architecture notes
------------------
* This module is the only place that turns a
  :class:`~slana.exceptions.SlanaError` into a process exit code.
* Exceptions raised by executors are not caught by :func:`run`.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace
from os import PathLike
from pathlib import Path
from typing import NoReturn

from rich.markup import escape

from slana.cli import exit_codes
from slana.cli.console import err_console, render_error
from slana.cli.dispatcher import execute_command
from slana.cli.parser import initialize_cli
from slana.config import Settings, configure_logging, load_settings
from slana.exceptions import SlanaError
from slana.infra.inventory_loader import load_inventory
from slana.version import __version__


# ---------------------------------------------------------------------------
# Error sink
# ---------------------------------------------------------------------------

def stop_with_error(error: BaseException) -> NoReturn:
    """Write the error banner for *error* to stderr and exit with status 1."""
    render_error(error)
    sys.exit(exit_codes.GENERAL_ERROR)


# ---------------------------------------------------------------------------
# Host tool entry point
# ---------------------------------------------------------------------------

def dispatch(settings: Settings, argv: Sequence[str] | None = None) -> int:
    """Load, initialize and dispatch using *settings*.  Returns the exit code."""
    inventory = load_inventory(settings.working_dir, file_name=settings.inventory_file)
    config = initialize_cli(inventory, settings.working_dir, package_file=settings.package_file)
    return execute_command(inventory, config, settings.working_dir, argv)


def run(
    working_dir: str | PathLike[str] | None = None,
    argv: Sequence[str] | None = None,
) -> NoReturn:
    """Run the inventory in *working_dir* against *argv* and exit.

    A host tool's executable needs nothing more than::

        from pathlib import Path
        import slana

        slana.run(Path(__file__).resolve().parent.parent)

    *working_dir* defaults to the configured ``SLANA_HOME`` (or the current
    directory); *argv* defaults to ``sys.argv[1:]``.
    """
    settings = _settings_for(working_dir)
    configure_logging(settings)

    try:
        code = dispatch(settings, argv)
    except SlanaError as exc:
        stop_with_error(exc)
    sys.exit(code)


# ---------------------------------------------------------------------------
# ``slana`` console script
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the parser for the ``slana`` script itself.

    * ``slana exec [--dir DIR] <command> [options]``
    * ``slana doctor [--dir DIR]``
    * ``slana --version``
    """
    parser = argparse.ArgumentParser(
        prog="slana",
        description="Declarative command line interfaces from a YAML inventory.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="action", metavar="<action>")

    exec_parser = subparsers.add_parser(
        "exec",
        help="Run a command from the inventory in DIR.",
    )
    exec_parser.add_argument("--dir", default=None, help="Working directory (default: $SLANA_HOME or cwd).")
    exec_parser.add_argument("args", nargs=argparse.REMAINDER, help="Command and options.")

    doctor_parser = subparsers.add_parser(
        "doctor",
        help="Validate the inventory, package manifest and executors in DIR.",
    )
    doctor_parser.add_argument("--dir", default=None, help="Working directory (default: $SLANA_HOME or cwd).")
    return parser


def _settings_for(directory: str | PathLike[str] | None) -> Settings:
    settings = load_settings()
    if directory is None:
        return settings
    return replace(settings, working_dir=Path(directory))


def main(argv: list[str] | None = None) -> int:
    """Run the ``slana`` script.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None``, ``sys.argv[1:]`` is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.action is None:
        parser.print_help()
        return exit_codes.SUCCESS

    settings = _settings_for(args.dir)
    configure_logging(settings)

    if args.action == "doctor":
        from slana.cli.doctor import run_doctor

        return run_doctor(settings)

    return dispatch(settings, args.args)


def cli() -> None:
    """Top-level error boundary invoked by the ``slana`` console script."""
    try:
        code = main()
        sys.exit(code)
    except SlanaError as exc:
        stop_with_error(exc)
    except KeyboardInterrupt:
        err_console().print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        err_console().print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
