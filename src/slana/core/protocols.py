"""Protocols (interfaces) consumed by the core layer.

The resolver depends only on these contracts; the file-based loader in
``slana.infra`` satisfies them structurally.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from slana.core.models import Command


class Executor(Protocol):
    """A callable implementing one command.

    Its return value is ignored and anything it raises propagates
    unchanged: slana does not supervise executors.
    """

    def __call__(self, command: Command) -> Any:
        ...  # pragma: no cover


class ExecutorLoader(Protocol):
    """Contract for turning an inventory executor reference into a callable."""

    def load(self, reference: str, working_dir: Path) -> object:
        """Load and return the object *reference* points to.

        Implementations return whatever the reference names; the resolver
        checks that it is callable.

        Raises
        ------
        InvalidExecutorError
            When the reference cannot be resolved or loaded.
        """
        ...  # pragma: no cover
