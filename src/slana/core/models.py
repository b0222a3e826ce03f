"""Domain models for slana.

Inventory-side models are **frozen** dataclasses created once per process
from the inventory file and never mutated.  :class:`Command` is the one
value handed across the boundary to an executor.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from slana.core.protocols import Executor


# ---------------------------------------------------------------------------
# Command inventory
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OptionSpec:
    """One option as declared in the inventory."""

    name: str | None
    """Long option name (``env`` for ``--env``).  Unnamed options are skipped."""

    alias: str | None = None
    """Short alias (``e`` for ``-e``)."""

    description: str | None = None

    default: Any = None

    type: str | None = None
    """Type tag: ``string``, ``number``, ``boolean``, ``array`` or ``count``."""


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """One command as declared in the inventory."""

    name: str | None
    description: str | None = None

    executor: str | None = None
    """Executor reference, relative to the working directory."""

    options: tuple[OptionSpec, ...] = ()


@dataclass(frozen=True, slots=True)
class Inventory:
    """The whole command inventory.  ``name`` is the tool's executable name."""

    name: str
    commands: tuple[CommandSpec, ...]


# ---------------------------------------------------------------------------
# Package manifest
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PackageManifest:
    """The subset of ``package.json`` slana relies on."""

    name: str | None
    version: str
    description: str | None = None
    bin: Mapping[str, str] = field(default_factory=dict)

    def declares(self, tool_name: str) -> bool:
        """Whether *tool_name* is bound to an executable under ``bin``."""
        return bool(self.bin.get(tool_name))


# ---------------------------------------------------------------------------
# Parser configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CliConfig:
    """Immutable description of the top-level argument parser.

    Produced by :func:`slana.cli.parser.initialize_cli` and materialized
    exactly once by the dispatcher.
    """

    prog: str
    usage: str
    version: str
    epilog: str
    description: str | None = None


# ---------------------------------------------------------------------------
# Resolution and dispatch
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ResolvedOption:
    name: str
    alias: str | None
    description: str | None
    default: Any
    type: str | None


@dataclass(frozen=True, slots=True)
class ResolvedCommand:
    """A command ready for registration: executor loaded, options validated."""

    name: str
    description: str | None
    """Inventory description prefixed with one flag hint per option."""

    options: Mapping[str, ResolvedOption]
    """Resolved options keyed by name, in declaration order."""

    executor: Executor


@dataclass(frozen=True, slots=True)
class ParsedInvocation:
    """What the parser made of the process arguments."""

    command_name: str | None
    options: Mapping[str, Any] = field(default_factory=dict)
    extras: tuple[str, ...] = ()
    """Arguments the parser did not recognise; ignored by dispatch."""


@dataclass(frozen=True, slots=True)
class Command:
    """The object an executor is called with.

    ``options`` holds one entry per option the command declares, keyed by
    option name, whether or not the flag was given on the command line.
    """

    name: str
    options: dict[str, Any] = field(default_factory=dict)
