"""Read Cargo-style TOML manifests: package name, description and dependency names."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from folderinfo.core.errors import ManifestError

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "Cargo.toml"

# Top-level keys such as "dependencies.serde" also declare a dependency.
DOTTED_DEPENDENCY_PREFIX = "dependencies."


@dataclass
class ManifestInfo:
    """Fields extracted from one manifest."""

    name: str | None
    description: str | None
    dependencies: list[str] = field(default_factory=list)


def read_manifest(path: Path) -> dict[str, Any] | None:
    """
    Load a manifest file into a plain dict.

    Returns None if the file cannot be read at all (missing, a directory,
    unreadable, not UTF-8). Raises ManifestError if it is read but is not valid TOML.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("No readable manifest at %s (%s)", path, exc)
        return None
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(path, f"unable to parse toml: {exc}") from exc


def _as_table(value: Any, path: Path, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ManifestError(path, f"expected {what} to be a table, got {value!r}")
    return value


def _as_str(value: Any, path: Path, what: str) -> str:
    if not isinstance(value, str):
        raise ManifestError(path, f"expected {what} to be a string, got {value!r}")
    return value


def parse_manifest(data: dict[str, Any], path: Path) -> ManifestInfo:
    """
    Extract name, description and dependency names from a parsed manifest.

    Dependencies are the keys of the [dependencies] table followed by every
    top-level "dependencies.<name>" key, both in declaration order. A name
    declared both ways is listed twice.
    """
    name: str | None = None
    description: str | None = None
    table_deps: list[str] = []
    dotted_deps: list[str] = []

    for key, value in data.items():
        if key == "package":
            package = _as_table(value, path, "[package]")
            if "name" in package:
                name = _as_str(package["name"], path, "package.name")
            if "description" in package:
                description = _as_str(package["description"], path, "package.description")
        elif key == "dependencies":
            table_deps.extend(_as_table(value, path, "[dependencies]").keys())
        elif key.startswith(DOTTED_DEPENDENCY_PREFIX):
            dotted_deps.append(key[len(DOTTED_DEPENDENCY_PREFIX) :])

    return ManifestInfo(
        name=name,
        description=description,
        dependencies=table_deps + dotted_deps,
    )
