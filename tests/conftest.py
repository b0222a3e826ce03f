"""Shared pytest fixtures for the slana test suite.

Guidelines
----------
* Every host project lives under ``tmp_path`` — nothing touches the
  real working directory.
* Executors used through the file loader record their calls by writing
  JSON next to themselves; dispatcher unit tests inject a recording
  loader instead.
"""

from __future__ import annotations

import json
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from slana.core.models import Command

INVENTORY = """\
name: tool
commands:
  - name: deploy
    description: Deploy the app
    executor: commands/deploy.py
    options:
      - name: env
        alias: e
        description: Target environment
        default: staging
      - name: force
        description: Skip confirmation
        type: boolean
  - name: status
    description: Show status
    executor: commands/status.py
"""

PACKAGE: dict[str, Any] = {
    "name": "tool",
    "version": "1.2.3",
    "description": "A tool built with slana.",
    "bin": {"tool": "bin/tool"},
}

RECORDING_EXECUTOR = """\
import json
from pathlib import Path


def execute(command):
    out = Path(__file__).with_name(Path(__file__).stem + ".out.json")
    out.write_text(json.dumps({"name": command.name, "options": command.options}))
"""


def write_project(
    root: Path,
    *,
    inventory: str | None = INVENTORY,
    package: dict[str, Any] | str | None = None,
    executors: dict[str, str] | None = None,
) -> Path:
    """Write a host project into *root* and return it.

    ``None`` for *inventory* leaves the inventory file out; a string
    *package* is written verbatim.
    """
    if inventory is not None:
        (root / "slana.yml").write_text(textwrap.dedent(inventory), encoding="utf-8")

    pkg = PACKAGE if package is None else package
    (root / "package.json").write_text(
        pkg if isinstance(pkg, str) else json.dumps(pkg),
        encoding="utf-8",
    )

    files = (
        {"commands/deploy.py": RECORDING_EXECUTOR, "commands/status.py": RECORDING_EXECUTOR}
        if executors is None
        else executors
    )
    for relative, source in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
    return root


def read_record(root: Path, executor: str) -> dict[str, Any] | None:
    """Return what a recording executor wrote, or ``None`` if it never ran."""
    path = root / "commands" / f"{executor}.out.json"
    if not path.exists():
        return None
    return json.loads(path.read_text(encoding="utf-8"))


class RecordingLoader:
    """In-memory :class:`~slana.core.protocols.ExecutorLoader`.

    Every reference resolves to a callable that appends the received
    :class:`Command` to :attr:`calls`, unless *objects* maps the
    reference to something else.
    """

    def __init__(self, objects: dict[str, object] | None = None) -> None:
        self.calls: list[tuple[str, Command]] = []
        self.loaded: list[str] = []
        self._objects = objects or {}

    def load(self, reference: str, working_dir: Path) -> object:
        self.loaded.append(reference)
        if reference in self._objects:
            return self._objects[reference]

        def _executor(command: Command) -> None:
            self.calls.append((reference, command))

        return _executor


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """A complete, valid host project."""
    return write_project(tmp_path)


@pytest.fixture()
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a customised host project into ``tmp_path``."""

    def _make(**kwargs: Any) -> Path:
        return write_project(tmp_path, **kwargs)

    return _make


@pytest.fixture()
def recording_loader() -> RecordingLoader:
    return RecordingLoader()
