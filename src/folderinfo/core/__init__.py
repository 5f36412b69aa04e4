"""Core library: manifest reading, crate tree building, text and DOT rendering."""

from folderinfo.core.dot import render_dot
from folderinfo.core.errors import FolderInfoError, ManifestError, UnnamedComponentError
from folderinfo.core.manifest import ManifestInfo, parse_manifest, read_manifest
from folderinfo.core.text import render_text
from folderinfo.core.tree import Project, build_project_tree, collect_crate_names

__all__ = [
    "render_dot",
    "FolderInfoError",
    "ManifestError",
    "UnnamedComponentError",
    "ManifestInfo",
    "parse_manifest",
    "read_manifest",
    "render_text",
    "Project",
    "build_project_tree",
    "collect_crate_names",
]
