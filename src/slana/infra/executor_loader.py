"""Infrastructure: load command executors from the host project.

An executor reference is a path relative to the working directory,
optionally followed by ``:attribute``::

    commands/deploy.py            -> commands/deploy.py, attribute "execute"
    commands/deploy               -> commands/deploy.py or commands/deploy/__init__.py
    commands/deploy.py:main       -> attribute "main"

Rules
-----
* Only files inside the working directory are loaded.
* Modules are imported with :mod:`importlib`; nothing is ``exec``-ed
  from strings.
* Any failure while importing is re-raised as
  :class:`~slana.exceptions.InvalidExecutorError`.
"""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from slana.exceptions import InvalidExecutorError

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTE: str = "execute"
"""Attribute looked up when a reference names no ``:attribute``."""

MODULE_NAMESPACE: str = "slana_executors"
"""Prefix for the ``sys.modules`` keys of loaded executor modules."""


@dataclass(frozen=True, slots=True)
class ExecutorReference:
    """A parsed executor reference."""

    path: str
    attribute: str = DEFAULT_ATTRIBUTE

    @classmethod
    def parse(cls, reference: str) -> ExecutorReference:
        path, sep, attribute = reference.strip().rpartition(":")
        if sep and attribute.isidentifier() and path:
            return cls(path=path, attribute=attribute)
        return cls(path=reference.strip())


class FileExecutorLoader:
    """Concrete :class:`~slana.core.protocols.ExecutorLoader` for files on disk.

    Usage::

        loader = FileExecutorLoader()
        execute = loader.load("commands/deploy.py", Path("/srv/tool"))
    """

    def load(self, reference: str, working_dir: Path) -> object:
        """Import the module *reference* points to and return its attribute.

        Raises
        ------
        InvalidExecutorError
            When the file is missing, outside *working_dir*, fails to
            import, or lacks the requested attribute.
        """
        ref = ExecutorReference.parse(reference)
        source = self._locate(ref.path, working_dir)
        module = self._import(source)

        try:
            return getattr(module, ref.attribute)
        except AttributeError as exc:
            raise InvalidExecutorError(
                f"{ref.path} does not define '{ref.attribute}'",
            ) from exc

    # ------------------------------------------------------------------
    # File resolution
    # ------------------------------------------------------------------

    @staticmethod
    def _locate(relative: str, working_dir: Path) -> Path:
        root = working_dir.resolve()
        base = (root / relative).resolve()

        try:
            base.relative_to(root)
        except ValueError as exc:
            raise InvalidExecutorError(
                f"{relative} points outside the working directory",
            ) from exc

        candidates = [base]
        if base.suffix != ".py":
            candidates.append(base.with_name(base.name + ".py"))
        candidates.append(base / "__init__.py")

        for candidate in candidates:
            if candidate.is_file() and candidate.suffix == ".py":
                return candidate
        raise InvalidExecutorError(f"{relative} does not exist in {root}")

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    @staticmethod
    def _module_name(source: Path) -> str:
        digest = hashlib.sha1(str(source).encode("utf-8")).hexdigest()[:12]
        stem = source.parent.name if source.name == "__init__.py" else source.stem
        safe_stem = "".join(ch if ch.isalnum() else "_" for ch in stem)
        return f"{MODULE_NAMESPACE}.{safe_stem}_{digest}"

    @classmethod
    def _import(cls, source: Path) -> ModuleType:
        name = cls._module_name(source)
        cached = sys.modules.get(name)
        if cached is not None:
            return cached

        spec = importlib.util.spec_from_file_location(name, source)
        if spec is None or spec.loader is None:
            raise InvalidExecutorError(f"{source} cannot be imported")

        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            sys.modules.pop(name, None)
            raise InvalidExecutorError(
                f"{source} failed to import: {type(exc).__name__}: {exc}",
            ) from exc

        logger.debug("imported executor module %s as %s", source, name)
        return module
