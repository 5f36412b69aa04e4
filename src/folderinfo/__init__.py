"""folderinfo: show the crates of a directory tree as a text report or a DOT graph."""

from importlib.metadata import version, PackageNotFoundError

from folderinfo.api import (
    build_tree,
    crate_names,
    format_dot,
    format_json,
    format_text,
)
from folderinfo.core.errors import FolderInfoError
from folderinfo.core.tree import Project

__all__ = [
    "build_tree",
    "crate_names",
    "format_dot",
    "format_json",
    "format_text",
    "FolderInfoError",
    "Project",
    "__version__",
]

try:
    __version__ = version("folderinfo")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed as package
