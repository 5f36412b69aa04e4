"""Public API: use folderinfo from Python or from other tools."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from folderinfo.core.dot import render_dot
from folderinfo.core.manifest import DEFAULT_MANIFEST_NAME
from folderinfo.core.text import render_text
from folderinfo.core.tree import Project, build_project_tree, collect_crate_names


def build_tree(
    path: Path | str = ".",
    *,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
    strict_names: bool = True,
) -> Project | None:
    """
    Build the crate tree for a directory.

    Args:
        path: Directory to start from (default: current directory).
        manifest_name: Manifest file looked up in each directory.
        strict_names: If True, a crate without a name is an error; if False
            it is kept with name=None.

    Returns:
        Root Project, or None if path itself has no manifest.
    """
    return build_project_tree(
        Path(path),
        manifest_name=manifest_name,
        strict_names=strict_names,
    )


def crate_names(tree: Project) -> set[str]:
    """Names of every crate in the tree."""
    return collect_crate_names(tree)


def format_text(tree: Project) -> str:
    """Indented text report, as printed by `folderinfo --format text`."""
    return "\n".join(render_text(tree))


def format_dot(
    tree: Project,
    *,
    ignore: Iterable[str] = (),
    highlight: Iterable[str] = (),
) -> str:
    """DOT digraph, as printed by `folderinfo --format dot`."""
    return "\n".join(render_dot(tree, ignore=ignore, highlight=highlight))


def format_json(tree: Project) -> str:
    """The tree as indented JSON."""
    return json.dumps(tree.to_dict(), indent=2)
