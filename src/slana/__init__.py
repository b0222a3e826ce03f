"""slana — declarative command line interfaces from a YAML inventory.

A host project describes its commands in ``slana.yml``, declares the tool
under ``bin`` in ``package.json`` and ships one executor module per
command.  slana turns that into a full CLI surface and dispatches each
invocation to the matching executor.
"""

from slana.cli.app import run, stop_with_error
from slana.cli.dispatcher import execute_command
from slana.cli.parser import initialize_cli
from slana.core.models import Command
from slana.core.resolver import parse_command
from slana.infra.inventory_loader import load_inventory
from slana.version import __version__

__all__: list[str] = [
    "Command",
    "__version__",
    "execute_command",
    "initialize_cli",
    "load_inventory",
    "parse_command",
    "run",
    "stop_with_error",
]
