"""Build and represent the tree of crates found under a directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from folderinfo.core.errors import UnnamedComponentError
from folderinfo.core.manifest import DEFAULT_MANIFEST_NAME, parse_manifest, read_manifest

logger = logging.getLogger(__name__)


@dataclass
class Project:
    """A node in the crate tree: one directory with a manifest and its nested crates."""

    folder: str
    name: str | None
    description: str | None = None
    dependencies: list[str] = field(default_factory=list)
    children: list[Project] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize node to a JSON-friendly dict."""
        return {
            "folder": self.folder,
            "name": self.name,
            "description": self.description,
            "dependencies": list(self.dependencies),
            "children": [c.to_dict() for c in self.children],
        }


def _folder_label(path: Path) -> str:
    # Path(".").name and Path("/").name are already ""; ".." has no usable name either.
    name = path.name
    return "" if name == ".." else name


def build_project_tree(
    path: Path,
    *,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
    strict_names: bool = True,
) -> Project | None:
    """
    Build the crate tree rooted at a directory.

    A directory without a readable manifest yields None and is not descended
    into. Otherwise every immediate subdirectory is tried in listing order and
    each one that yields a node becomes a child.

    Args:
        path: Directory to inspect.
        manifest_name: File name of the manifest in each directory.
        strict_names: If True, a manifest without package.name raises
            UnnamedComponentError; if False the node keeps name=None.

    Returns:
        Project for the directory, or None if it has no manifest.

    Raises:
        ManifestError: A manifest is not valid TOML or has badly typed sections.
        UnnamedComponentError: strict_names is set and a crate has no name.
        OSError: A directory listing failed.
    """
    path = Path(path)
    data = read_manifest(path / manifest_name)
    if data is None:
        return None

    info = parse_manifest(data, path / manifest_name)
    if info.name is None and strict_names:
        raise UnnamedComponentError(path)
    logger.debug("Found crate %r in %s", info.name, path)

    children: list[Project] = []
    for entry in path.iterdir():
        if not entry.is_dir():
            continue
        child = build_project_tree(
            entry,
            manifest_name=manifest_name,
            strict_names=strict_names,
        )
        if child is not None:
            children.append(child)

    return Project(
        folder=_folder_label(path),
        name=info.name,
        description=info.description,
        dependencies=info.dependencies,
        children=children,
    )


def collect_crate_names(root: Project) -> set[str]:
    """Return the names of every crate in the tree (unnamed crates are skipped)."""
    names: set[str] = set()

    def _collect(node: Project) -> None:
        if node.name is not None:
            names.add(node.name)
        for child in node.children:
            _collect(child)

    _collect(root)
    return names
