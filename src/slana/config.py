"""Runtime settings and logging setup for slana.

Settings come from environment variables only; there is no configuration
file of slana's own.  The command inventory and package manifest file
names are configurable so a host project can keep them elsewhere than
the defaults.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_INVENTORY_FILE: str = "slana.yml"
DEFAULT_PACKAGE_FILE: str = "package.json"

_TRUTHY: frozenset[str] = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved runtime settings."""

    working_dir: Path
    """Directory holding the inventory, package manifest and executors."""

    inventory_file: str = DEFAULT_INVENTORY_FILE
    """Inventory file name, relative to :attr:`working_dir`."""

    package_file: str = DEFAULT_PACKAGE_FILE
    """Package manifest file name, relative to :attr:`working_dir`."""

    debug: bool = False
    """Emit debug logging on stderr."""


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from *environ* (``os.environ`` by default)."""
    env = os.environ if environ is None else environ
    home = env.get("SLANA_HOME")
    return Settings(
        working_dir=Path(home) if home else Path.cwd(),
        inventory_file=env.get("SLANA_INVENTORY") or DEFAULT_INVENTORY_FILE,
        package_file=env.get("SLANA_PACKAGE") or DEFAULT_PACKAGE_FILE,
        debug=env.get("SLANA_DEBUG", "").strip().lower() in _TRUTHY,
    )


def configure_logging(settings: Settings) -> None:
    """Attach a stderr handler to the ``slana`` logger when debugging.

    Idempotent: repeated calls never stack handlers.
    """
    if not settings.debug:
        return
    logger = logging.getLogger("slana")
    if getattr(logger, "_slana_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("slana: %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, "_slana_configured", True)
