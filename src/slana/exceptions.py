"""Custom exception hierarchy for slana.

Every failure slana detects while loading an inventory, binding it to a
package manifest or registering commands is a subclass of
:class:`SlanaError`.  Raw third-party exceptions (YAML/JSON decoding errors,
import failures inside executor modules, ``argparse`` conflicts) must NEVER
propagate past the layer that triggered them. They are caught there and
re-raised as one of the typed errors below.

Hierarchy
---------
SlanaError
├── InvalidDirectoryError
├── ManifestError
│   ├── MissingManifestError
│   ├── InvalidManifestError
│   ├── EmptyManifestError
│   ├── MissingNameError
│   └── NoCommandsError
├── PackageManifestError
│   ├── MissingPackageManifestError
│   ├── InvalidPackageManifestError
│   └── UnboundCommandNameError
└── CommandError
    ├── InvalidExecutorError
    ├── InvalidOptionError
    ├── MissingCommandNameError
    └── UnknownCommandError

Errors raised by executors themselves are not part of this hierarchy and
are never caught by slana.
"""

from __future__ import annotations


class SlanaError(Exception):
    """Base exception for all slana errors.

    The top-level error boundary renders ``str(exc)`` as the banner message
    and, when present, :attr:`hint` on the following line.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


class InvalidDirectoryError(SlanaError):
    """Raised when the working directory is missing or does not exist."""


# --- Command inventory (slana.yml) -----------------------------------------

class ManifestError(SlanaError):
    """Base class for command inventory problems."""


class MissingManifestError(ManifestError):
    """Raised when the inventory file is absent."""


class InvalidManifestError(ManifestError):
    """Raised when the inventory file cannot be parsed or has the wrong shape."""


class EmptyManifestError(ManifestError):
    """Raised when the inventory file parses to nothing."""


class MissingNameError(ManifestError):
    """Raised when the inventory does not name the command line tool."""


class NoCommandsError(ManifestError):
    """Raised when the inventory declares no commands."""


# --- Package manifest (package.json) ---------------------------------------

class PackageManifestError(SlanaError):
    """Base class for package manifest problems."""


class MissingPackageManifestError(PackageManifestError):
    """Raised when the package manifest is absent."""


class InvalidPackageManifestError(PackageManifestError):
    """Raised when the package manifest cannot be parsed."""


class UnboundCommandNameError(PackageManifestError):
    """Raised when the tool name is not declared under ``bin``."""


# --- Command registration and dispatch -------------------------------------

class CommandError(SlanaError):
    """Base class for command resolution and dispatch problems."""


class InvalidExecutorError(CommandError):
    """Raised when a command's executor is missing, unloadable or not callable."""


class InvalidOptionError(CommandError):
    """Raised when an option declaration cannot be registered."""


class MissingCommandNameError(CommandError):
    """Raised when a command in the inventory has no name."""


class UnknownCommandError(CommandError):
    """Raised when the invoked command is not in the inventory."""
