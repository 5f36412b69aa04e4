"""Errors raised while building a crate tree."""

from __future__ import annotations

from pathlib import Path


class FolderInfoError(Exception):
    """Base class for fatal folderinfo errors."""


class ManifestError(FolderInfoError):
    """A manifest exists but its content is not usable."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class UnnamedComponentError(FolderInfoError):
    """A manifest has no package name and strict naming is on."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Crate without name in {path}")
        self.path = path
