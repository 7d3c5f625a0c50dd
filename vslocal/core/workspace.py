"""Workspace root detection with boundary enforcement.

The root is the nearest ancestor of the current directory holding a project
marker. All path resolutions are checked against that root before anything
touches the filesystem.
"""

from __future__ import annotations

import os
from pathlib import Path

from vslocal.core.errors import WorkspaceBoundaryError, WorkspaceNotFoundError


# Checked in this order at each directory
WORKSPACE_MARKERS: tuple[str, ...] = (".vscode/", ".git/", "package.json", "*.code-workspace")
WORKSPACE_FILE_SUFFIX = ".code-workspace"
ROOT_LABEL = "(root)"


def detect_marker(directory: Path | str) -> str | None:
    """Return the first workspace marker present in *directory*, if any.

    The directory is listed rather than stat-checked so that an unreadable
    ancestor raises instead of looking like a directory without markers.
    """
    with os.scandir(directory) as it:
        entries = {entry.name: entry for entry in it}

    vscode = entries.get(".vscode")
    if vscode is not None and vscode.is_dir():
        return ".vscode/"
    git = entries.get(".git")
    if git is not None and git.is_dir():
        return ".git/"
    package_json = entries.get("package.json")
    if package_json is not None and package_json.is_file():
        return "package.json"
    for name in sorted(entries):
        if name.endswith(WORKSPACE_FILE_SUFFIX) and entries[name].is_file():
            return name
    return None


def find_workspace_root(start: Path | str) -> Path | None:
    """Walk upward from *start* to the nearest directory holding a marker.

    The starting directory and the filesystem root are both checked.
    Returns None when no ancestor qualifies.
    """
    current = Path(os.path.normpath(os.path.abspath(start)))
    while True:
        if detect_marker(current) is not None:
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def is_within_workspace(target: Path | str, root: Path | str) -> bool:
    """True if *target* is *root* or lies beneath it.

    Both paths must already be absolute and normalized.
    """
    target_str = str(target)
    root_str = str(root)
    if target_str == root_str:
        return True
    prefix = root_str if root_str.endswith(os.sep) else root_str + os.sep
    return target_str.startswith(prefix)


def resolve_path(path: Path | str, cwd: Path | str) -> Path:
    """Resolve *path* against *cwd* lexically (symlinks are not followed)."""
    return Path(os.path.normpath(os.path.join(os.fspath(cwd), os.fspath(path))))


class Workspace:
    """A located workspace root plus the directory commands run from.

    Unlike the process working directory, ``cwd`` is explicit so every
    resolution can be reproduced from the two values alone.
    """

    def __init__(self, root: Path | str, cwd: Path | str | None = None, marker: str | None = None) -> None:
        self._root = Path(os.path.normpath(os.path.abspath(root)))
        if cwd is not None:
            self._cwd = Path(os.path.normpath(os.path.abspath(cwd)))
        else:
            self._cwd = self._root
        self._marker = marker

    @classmethod
    def discover(cls, cwd: Path | str) -> "Workspace":
        """Locate the workspace enclosing *cwd*. Raises if there is none."""
        root = find_workspace_root(cwd)
        if root is None:
            raise WorkspaceNotFoundError()
        return cls(root, cwd=cwd, marker=detect_marker(root))

    @property
    def root(self) -> Path:
        """Immutable project boundary."""
        return self._root

    @property
    def cwd(self) -> Path:
        return self._cwd

    @property
    def marker(self) -> str | None:
        """Marker that identified the root, when discovered."""
        return self._marker

    def absolute(self, path: Path | str) -> Path:
        """Resolve *path* relative to cwd without a boundary check."""
        return resolve_path(path, self._cwd)

    def contains(self, path: Path | str) -> bool:
        return is_within_workspace(self.absolute(path), self._root)

    def require(self, path: Path | str, role: str = "Target", command: str = "") -> Path:
        """Resolve *path* and raise unless it stays inside the root."""
        resolved = self.absolute(path)
        if not is_within_workspace(resolved, self._root):
            raise WorkspaceBoundaryError(resolved, self._root, role=role, command=command)
        return resolved

    def relative(self, path: Path | str) -> str:
        """Workspace-relative display form; the root itself is ``(root)``."""
        rel = os.path.relpath(self.absolute(path), self._root)
        return ROOT_LABEL if rel == os.curdir else rel

    def relative_to_cwd(self, path: Path | str) -> str:
        return os.path.relpath(self.absolute(path), self._cwd)
