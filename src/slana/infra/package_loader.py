"""Infrastructure: read the host package manifest (``package.json``).

Only the tool name binding (``bin``), ``version``, ``name`` and
``description`` are used.  JSON decoding errors are re-raised as
:class:`~slana.exceptions.InvalidPackageManifestError`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from os import PathLike

from slana.config import DEFAULT_PACKAGE_FILE
from slana.core.models import PackageManifest
from slana.exceptions import InvalidPackageManifestError, MissingPackageManifestError
from slana.infra.inventory_loader import require_directory

logger = logging.getLogger(__name__)


def load_package_manifest(
    working_dir: str | PathLike[str] | None,
    *,
    file_name: str = DEFAULT_PACKAGE_FILE,
) -> PackageManifest:
    """Read ``<working_dir>/<file_name>``.

    A string ``bin`` is bound to the package ``name``, as npm does.

    Raises
    ------
    InvalidDirectoryError
        If *working_dir* is missing or does not exist.
    MissingPackageManifestError
        If the manifest file is absent.
    InvalidPackageManifestError
        If the file is not a JSON object with a string ``version``.
    """
    directory = require_directory(working_dir)
    path = directory / file_name

    if not path.is_file():
        raise MissingPackageManifestError(
            "Looks like your package file is missing.",
            hint=f"Expected {path}",
        )

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
        raise InvalidPackageManifestError(
            "Looks like your package file is invalid.",
            hint=str(exc),
        ) from exc

    if not isinstance(payload, Mapping):
        raise InvalidPackageManifestError(
            "Looks like your package file is invalid.",
            hint="The top level must be a JSON object.",
        )

    version = payload.get("version")
    if not isinstance(version, str) or not version.strip():
        raise InvalidPackageManifestError(
            "Looks like your package file is invalid.",
            hint="'version' must be a non-empty string.",
        )

    name = payload.get("name") if isinstance(payload.get("name"), str) else None
    description = payload.get("description")

    manifest = PackageManifest(
        name=name,
        version=version.strip(),
        description=description if isinstance(description, str) else None,
        bin=_bin_mapping(payload.get("bin"), name),
    )
    logger.debug("loaded package %r version %s from %s", manifest.name, manifest.version, path)
    return manifest


def _bin_mapping(raw: object, package_name: str | None) -> dict[str, str]:
    if isinstance(raw, str):
        if not package_name or not raw:
            return {}
        # "@scope/tool" installs as "tool"
        return {package_name.rsplit("/", 1)[-1]: raw}
    if isinstance(raw, Mapping):
        return {str(key): str(value) for key, value in raw.items() if value}
    return {}
