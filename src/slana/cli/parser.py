"""CLI initializer: bind an inventory to its package and describe the parser.

:func:`initialize_cli` returns a :class:`~slana.core.models.CliConfig`
value; :func:`build_parser` materializes it into an
:class:`argparse.ArgumentParser`.  The config is never mutated after
creation, so the same value can be threaded through resolution and
dispatch.
"""

from __future__ import annotations

import argparse
from os import PathLike

from slana.config import DEFAULT_PACKAGE_FILE
from slana.core.models import CliConfig, Inventory
from slana.exceptions import UnboundCommandNameError
from slana.infra.package_loader import load_package_manifest

USAGE_TEMPLATE: str = "<command> [options]"


def initialize_cli(
    inventory: Inventory,
    working_dir: str | PathLike[str] | None,
    *,
    package_file: str = DEFAULT_PACKAGE_FILE,
) -> CliConfig:
    """Build the parser configuration for *inventory*.

    Raises
    ------
    InvalidDirectoryError
        If *working_dir* is missing or does not exist.
    MissingPackageManifestError
        If the package manifest is absent.
    InvalidPackageManifestError
        If the package manifest cannot be parsed.
    UnboundCommandNameError
        If the package does not declare ``inventory.name`` under ``bin``.
    """
    package = load_package_manifest(working_dir, file_name=package_file)

    if not package.declares(inventory.name):
        raise UnboundCommandNameError(
            "Looks like your command-line tool name is not defined in your manifest",
            hint=f'Add "bin": {{"{inventory.name}": "<script>"}} to {package_file}.',
        )

    return CliConfig(
        prog=inventory.name,
        usage=f"{inventory.name} {USAGE_TEMPLATE}",
        version=package.version,
        epilog=f"v{package.version}",
        description=package.description,
    )


def build_parser(config: CliConfig) -> argparse.ArgumentParser:
    """Materialize *config* into a top-level parser.

    Help text is rendered verbatim (no re-wrapping); ``-h/--help`` and
    ``--version`` are added automatically.  Long options must be spelled
    out in full, so unknown flags never bind to a declared prefix.
    """
    parser = argparse.ArgumentParser(
        prog=config.prog,
        usage=escape_format(config.usage),
        description=config.description,
        epilog=config.epilog,
        formatter_class=argparse.RawTextHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=config.version,
    )
    return parser


def escape_format(text: str | None) -> str | None:
    """Double every ``%`` in *text*; argparse %-formats help and usage strings."""
    return text.replace("%", "%%") if text else text
