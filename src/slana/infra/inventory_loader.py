"""Infrastructure: load and validate the command inventory (``slana.yml``).

This is the only module that imports ``yaml``.  ``yaml.YAMLError`` is
caught here and re-raised as
:class:`~slana.exceptions.InvalidManifestError`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from os import PathLike
from pathlib import Path
from typing import Any

import yaml

from slana.config import DEFAULT_INVENTORY_FILE
from slana.core.models import CommandSpec, Inventory, OptionSpec
from slana.exceptions import (
    EmptyManifestError,
    InvalidDirectoryError,
    InvalidManifestError,
    MissingManifestError,
    MissingNameError,
    NoCommandsError,
)

logger = logging.getLogger(__name__)


def require_directory(working_dir: str | PathLike[str] | None) -> Path:
    """Return *working_dir* as a :class:`Path` or raise :class:`InvalidDirectoryError`."""
    if not working_dir:
        raise InvalidDirectoryError("Looks like your working directory is invalid")
    path = Path(working_dir)
    if not path.is_dir():
        raise InvalidDirectoryError(
            "Looks like your working directory is invalid",
            hint=f"{path} does not exist or is not a directory.",
        )
    return path


def load_inventory(
    working_dir: str | PathLike[str] | None,
    *,
    file_name: str = DEFAULT_INVENTORY_FILE,
) -> Inventory:
    """Read ``<working_dir>/<file_name>`` and build an :class:`Inventory`.

    Raises
    ------
    InvalidDirectoryError
        If *working_dir* is missing or does not exist.
    MissingManifestError
        If the inventory file is absent.
    InvalidManifestError
        If the file is not valid YAML or is not shaped like an inventory.
    EmptyManifestError
        If the file parses to nothing.
    MissingNameError
        If the top-level ``name`` is absent.
    NoCommandsError
        If ``commands`` is absent or empty.
    """
    directory = require_directory(working_dir)
    path = directory / file_name

    if not path.is_file():
        raise MissingManifestError(
            "Looks like your Slana file is missing.",
            hint=f"Expected {path}",
        )

    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise InvalidManifestError(
            "Looks like your Slana file is invalid.",
            hint=_yaml_problem(exc),
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidManifestError(
            "Looks like your Slana file is invalid.",
            hint=str(exc),
        ) from exc

    if not payload:
        raise EmptyManifestError("Looks like your Slana file is empty.")

    if not isinstance(payload, Mapping):
        raise InvalidManifestError(
            "Looks like your Slana file is invalid.",
            hint=f"The top level must be a mapping, got {type(payload).__name__}.",
        )

    name = payload.get("name")
    if not isinstance(name, str) or not name.strip():
        raise MissingNameError(
            "Looks like your Slana file is missing the name of your command line tool",
        )

    raw_commands = payload.get("commands")
    if not raw_commands:
        raise NoCommandsError("Looks like your Slana file does not specify any commands")
    if not isinstance(raw_commands, list):
        raise InvalidManifestError(
            "Looks like your Slana file is invalid.",
            hint="'commands' must be a list.",
        )

    commands = tuple(_parse_command(index, raw) for index, raw in enumerate(raw_commands))
    logger.debug("loaded %d command(s) for %r from %s", len(commands), name, path)
    return Inventory(name=name.strip(), commands=commands)


# ---------------------------------------------------------------------------
# Raw mapping → model parsers
# ---------------------------------------------------------------------------

def _parse_command(index: int, raw: Any) -> CommandSpec:
    if not isinstance(raw, Mapping):
        raise InvalidManifestError(
            "Looks like your Slana file is invalid.",
            hint=f"Command #{index + 1} must be a mapping.",
        )

    raw_options = raw.get("options") or []
    if not isinstance(raw_options, list):
        raise InvalidManifestError(
            "Looks like your Slana file is invalid.",
            hint=f"The options of command #{index + 1} must be a list.",
        )

    return CommandSpec(
        name=_optional_str(raw.get("name")),
        description=_optional_str(raw.get("description")),
        executor=_optional_str(raw.get("executor")),
        options=tuple(_parse_option(index, raw_option) for raw_option in raw_options),
    )


def _parse_option(command_index: int, raw: Any) -> OptionSpec:
    if not isinstance(raw, Mapping):
        raise InvalidManifestError(
            "Looks like your Slana file is invalid.",
            hint=f"Each option of command #{command_index + 1} must be a mapping.",
        )
    return OptionSpec(
        name=_optional_str(raw.get("name")),
        alias=_optional_str(raw.get("alias")),
        description=_optional_str(raw.get("description")),
        default=raw.get("default"),
        type=_optional_str(raw.get("type")),
    )


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _yaml_problem(exc: yaml.YAMLError) -> str:
    mark = getattr(exc, "problem_mark", None)
    problem = getattr(exc, "problem", None) or str(exc)
    if mark is None:
        return str(problem)
    return f"{problem} (line {mark.line + 1}, column {mark.column + 1})"
