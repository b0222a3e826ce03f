"""Infrastructure layer — files on disk.

Reads the command inventory (YAML), the package manifest (JSON) and
imports executor modules.  Every raw parsing or import error is caught
here and re-raised as a :class:`~slana.exceptions.SlanaError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output.
"""

from slana.infra.executor_loader import ExecutorReference, FileExecutorLoader
from slana.infra.inventory_loader import load_inventory, require_directory
from slana.infra.package_loader import load_package_manifest

__all__: list[str] = [
    "ExecutorReference",
    "FileExecutorLoader",
    "load_inventory",
    "load_package_manifest",
    "require_directory",
]
