"""Dispatcher: register every inventory command, parse argv, run one executor.

Each command becomes an ``argparse`` sub-parser carrying its own options.
Resolution happens for *every* command before anything is parsed, so a
broken executor reference fails the whole tool even when a different
command is invoked.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from os import PathLike
from pathlib import Path
from typing import Any

from slana.cli import exit_codes
from slana.cli.parser import build_parser, escape_format
from slana.core.models import CliConfig, Command, Inventory, ParsedInvocation, ResolvedCommand, ResolvedOption
from slana.core.options import ARRAY, BOOLEAN, COUNT, NUMBER, parse_number
from slana.core.protocols import ExecutorLoader
from slana.core.resolver import parse_command
from slana.exceptions import InvalidOptionError, MissingCommandNameError, UnknownCommandError
from slana.infra.executor_loader import FileExecutorLoader
from slana.infra.inventory_loader import require_directory

logger = logging.getLogger(__name__)

COMMAND_DEST: str = "slana:command"
"""Namespace attribute holding the invoked command name."""


def execute_command(
    inventory: Inventory,
    config: CliConfig,
    working_dir: str | PathLike[str] | None,
    argv: Sequence[str] | None = None,
    *,
    loader: ExecutorLoader | None = None,
) -> int:
    """Register the inventory, parse *argv* and invoke the matching executor.

    Parameters
    ----------
    argv:
        Arguments after the program name.  ``sys.argv[1:]`` when ``None``.
    loader:
        Executor loader; :class:`FileExecutorLoader` when ``None``.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` once the executor returns, or
        :data:`exit_codes.GENERAL_ERROR` when no command was given (help is
        printed first).

    Raises
    ------
    InvalidDirectoryError
        If *working_dir* is missing or does not exist.
    MissingCommandNameError
        If a command in the inventory has no name.
    InvalidExecutorError, InvalidOptionError
        If any command fails to resolve or register.
    UnknownCommandError
        If the invoked command is not in the inventory (help is printed
        first).
    """
    directory = require_directory(working_dir)
    commands = resolve_commands(inventory, config, directory, loader or FileExecutorLoader())

    parser = build_parser(config)
    register_commands(parser, config, commands.values())
    dispatch_table = {name: resolved.executor for name, resolved in commands.items()}

    args = list(sys.argv[1:] if argv is None else argv)
    token = command_token(args)
    if token is not None and token not in dispatch_table:
        parser.print_help()
        raise UnknownCommandError(f"Sorry, the {token} command is not supported.")

    invocation = parse_invocation(parser, commands, args)
    if invocation.command_name is None:
        parser.print_help()
        return exit_codes.GENERAL_ERROR

    if invocation.extras:
        logger.debug("ignoring unrecognised arguments: %s", " ".join(invocation.extras))

    command = Command(name=invocation.command_name, options=dict(invocation.options))
    logger.debug("dispatching %s with options %r", command.name, command.options)
    dispatch_table[command.name](command)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Resolution and registration
# ---------------------------------------------------------------------------

def resolve_commands(
    inventory: Inventory,
    config: CliConfig,
    working_dir: Path,
    loader: ExecutorLoader,
) -> dict[str, ResolvedCommand]:
    """Resolve every command spec; a repeated name keeps the last one."""
    resolved: dict[str, ResolvedCommand] = {}
    for spec in inventory.commands:
        if not spec.name:
            raise MissingCommandNameError(
                "Make sure each command in your command inventory has a name",
            )
        if spec.name in resolved:
            logger.warning("command %r is declared more than once; the last declaration wins", spec.name)
        resolved[spec.name] = parse_command(spec, config, working_dir, loader)
    return resolved


def register_commands(
    parser: argparse.ArgumentParser,
    config: CliConfig,
    commands: Iterable[ResolvedCommand],
) -> None:
    """Add one sub-parser per resolved command to *parser*."""
    subparsers = parser.add_subparsers(
        dest=COMMAND_DEST,
        metavar="<command>",
        title="commands",
    )
    for resolved in commands:
        subparser = subparsers.add_parser(
            resolved.name,
            help=escape_format(resolved.description),
            description=resolved.description,
            usage=escape_format(f"{config.prog} {resolved.name} [options]"),
            epilog=config.epilog,
            formatter_class=argparse.RawTextHelpFormatter,
            allow_abbrev=False,
        )
        for option in resolved.options.values():
            _add_option(subparser, resolved.name, option)


def _add_option(parser: argparse.ArgumentParser, command_name: str, option: ResolvedOption) -> None:
    flags = [f"--{option.name}"]
    if option.alias:
        flags.append(f"-{option.alias}")

    kwargs: dict[str, Any] = {
        "dest": option.name,
        "default": option.default,
        "help": escape_format(option.description),
    }
    if option.type == BOOLEAN:
        kwargs["action"] = argparse.BooleanOptionalAction
        if option.default is None:
            kwargs["default"] = False
    elif option.type == COUNT:
        kwargs["action"] = "count"
        if option.default is None:
            kwargs["default"] = 0
    elif option.type == ARRAY:
        kwargs["nargs"] = "*"
    elif option.type == NUMBER:
        kwargs["type"] = parse_number
    else:
        kwargs["type"] = str

    try:
        parser.add_argument(*flags, **kwargs)
    except (argparse.ArgumentError, ValueError, TypeError) as exc:
        raise InvalidOptionError(
            f"The --{option.name} option of the {command_name} command cannot be registered",
            hint=str(exc),
        ) from exc


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def command_token(args: Sequence[str]) -> str | None:
    """Return the first positional token in *args*, or ``None``."""
    for arg in args:
        if arg == "--":
            continue
        if not arg.startswith("-"):
            return arg
    return None


def parse_invocation(
    parser: argparse.ArgumentParser,
    commands: dict[str, ResolvedCommand],
    args: Sequence[str],
) -> ParsedInvocation:
    """Parse *args*, keeping only the options the invoked command declares."""
    namespace, extras = parser.parse_known_args(list(args))
    name = getattr(namespace, COMMAND_DEST, None)
    if name is None:
        return ParsedInvocation(command_name=None, extras=tuple(extras))

    declared = commands[name].options
    options = {option_name: getattr(namespace, option_name, None) for option_name in declared}
    return ParsedInvocation(command_name=name, options=options, extras=tuple(extras))
