"""Core layer — inventory models and command resolution.

Rules
-----
* No filesystem access; executors are loaded through the injected
  :class:`~slana.core.protocols.ExecutorLoader`.
* No imports from ``cli`` or ``infra``.
* No user-facing output.
"""

from slana.core.models import (
    CliConfig,
    Command,
    CommandSpec,
    Inventory,
    OptionSpec,
    PackageManifest,
    ParsedInvocation,
    ResolvedCommand,
    ResolvedOption,
)
from slana.core.protocols import Executor, ExecutorLoader
from slana.core.resolver import parse_command

__all__: list[str] = [
    "CliConfig",
    "Command",
    "CommandSpec",
    "Executor",
    "ExecutorLoader",
    "Inventory",
    "OptionSpec",
    "PackageManifest",
    "ParsedInvocation",
    "ResolvedCommand",
    "ResolvedOption",
    "parse_command",
]
