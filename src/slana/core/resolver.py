"""Command resolution from inventory entry to registrable command.

:func:`parse_command` turns one :class:`~slana.core.models.CommandSpec`
into a :class:`~slana.core.models.ResolvedCommand`: the executor reference
is loaded through an injected :class:`~slana.core.protocols.ExecutorLoader`,
options are validated and collected, and the help description gains a
flag hint per option.

Guarantees
----------
* No parser state is read or written; the ``config`` argument is carried
  through unchanged.
* Only :class:`~slana.exceptions.SlanaError` subclasses escape.
"""

from __future__ import annotations

import logging
from pathlib import Path

from slana.core.models import CliConfig, CommandSpec, ResolvedCommand, ResolvedOption
from slana.core.options import OPTION_TYPES, describe_with_hints, is_known_type, normalize_type
from slana.core.protocols import Executor, ExecutorLoader
from slana.exceptions import InvalidExecutorError, InvalidOptionError, SlanaError

logger = logging.getLogger(__name__)


def parse_command(
    spec: CommandSpec,
    config: CliConfig,
    working_dir: Path,
    loader: ExecutorLoader,
) -> ResolvedCommand:
    """Resolve *spec* against *working_dir*.

    Raises
    ------
    InvalidExecutorError
        If the spec has no executor, the executor cannot be loaded, or
        what it names is not callable.
    InvalidOptionError
        If an option declares an unknown type tag.
    """
    executor = _resolve_executor(spec, working_dir, loader)
    options = _resolve_options(spec)
    description = describe_with_hints(spec.description, options.values())

    logger.debug(
        "resolved command %r for %s (%d option(s))",
        spec.name,
        config.prog,
        len(options),
    )
    return ResolvedCommand(
        name=spec.name or "",
        description=description,
        options=options,
        executor=executor,
    )


def _invalid_executor(spec: CommandSpec, *, detail: str | None = None) -> InvalidExecutorError:
    return InvalidExecutorError(
        f"Make sure the {spec.name} command has a valid command executor",
        hint=detail or "Point 'executor' at a Python file exposing an 'execute' callable.",
    )


def _resolve_executor(
    spec: CommandSpec,
    working_dir: Path,
    loader: ExecutorLoader,
) -> Executor:
    if not spec.executor:
        raise _invalid_executor(spec)

    try:
        executor = loader.load(spec.executor, working_dir)
    except SlanaError as exc:
        logger.debug("executor %r failed to load: %s", spec.executor, exc)
        raise _invalid_executor(spec, detail=str(exc)) from exc
    except Exception as exc:
        raise _invalid_executor(spec, detail=f"{type(exc).__name__}: {exc}") from exc

    if not callable(executor):
        logger.debug("executor %r is %s, not callable", spec.executor, type(executor).__name__)
        raise _invalid_executor(spec)
    return executor


def _resolve_options(spec: CommandSpec) -> dict[str, ResolvedOption]:
    """Collect named options in declaration order.

    A repeated name keeps its first position and takes the later
    declaration's settings.
    """
    resolved: dict[str, ResolvedOption] = {}
    for option in spec.options:
        if not option.name:
            continue
        tag = normalize_type(option.type)
        if not is_known_type(tag):
            raise InvalidOptionError(
                f"The --{option.name} option of the {spec.name} command has an unknown type '{option.type}'",
                hint="Supported types: " + ", ".join(sorted(OPTION_TYPES)),
            )
        resolved[option.name] = ResolvedOption(
            name=option.name,
            alias=option.alias or None,
            description=option.description,
            default=option.default,
            type=tag,
        )
    return resolved
