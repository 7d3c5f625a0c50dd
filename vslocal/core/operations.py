"""Workspace-bounded change-directory, move and remove.

Each mutating operation is split into a ``plan_*`` step that validates every
path and a step that mutates. Nothing is touched until the plan succeeds.
"""

from __future__ import annotations

import errno
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from vslocal.core.errors import (
    MutationError,
    PathAccessError,
    TargetMissingError,
    TypeMismatchError,
)
from vslocal.core.logging import get_logger
from vslocal.core.shell import format_handoff
from vslocal.core.workspace import Workspace, is_within_workspace


@dataclass
class PathCheck:
    """Containment verdict for one resolved path."""
    path: Path
    within: bool
    label: str = "Path"


def check_paths(workspace: Workspace, paths: list[str], labels: Optional[list[str]] = None) -> list[PathCheck]:
    """Resolve each path and test containment. Never touches the filesystem."""
    checks: list[PathCheck] = []
    for index, raw in enumerate(paths):
        resolved = workspace.absolute(raw)
        label = labels[index] if labels and index < len(labels) else "Path"
        checks.append(PathCheck(resolved, is_within_workspace(resolved, workspace.root), label))
    return checks


def _stat(path: Path, follow_symlinks: bool = True) -> Optional[os.stat_result]:
    """Stat *path*, or None if it does not exist.

    Other failures, such as a name that is too long or a denied permission,
    raise PathAccessError instead of passing for a missing path.
    """
    try:
        return os.stat(path, follow_symlinks=follow_symlinks)
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as e:
        if e.errno == errno.ELOOP:
            return None
        raise PathAccessError(path, e) from e


# --- change directory ---


@dataclass
class ChangeDirResult:
    target: Path
    relative: str
    workspace_relative: str

    @property
    def handoff(self) -> str:
        return format_handoff(self.target)


def change_directory(workspace: Workspace, target: str) -> ChangeDirResult:
    """Validate a cd target: it must exist, be a directory and stay inside."""
    path = workspace.absolute(target)
    st = _stat(path)
    if st is None:
        raise TargetMissingError(path, kind="Directory")
    if not stat.S_ISDIR(st.st_mode):
        raise TypeMismatchError(f"Not a directory: {path}", path)
    workspace.require(path, role="Target directory", command="cd")
    get_logger().debug("cd resolved target=%s", path)
    return ChangeDirResult(
        target=path,
        relative=workspace.relative_to_cwd(path),
        workspace_relative=workspace.relative(path),
    )


# --- move ---


@dataclass
class MovePlan:
    source: Path
    destination: Path
    create_parent: Optional[Path] = None


@dataclass
class MoveResult:
    source: Path
    destination: Path
    created_dir: Optional[Path] = None


def plan_move(workspace: Workspace, source: str, destination: str) -> MovePlan:
    """Validate both endpoints before anything is moved."""
    src = workspace.absolute(source)
    dst = workspace.absolute(destination)
    if _stat(src, follow_symlinks=False) is None:
        raise TargetMissingError(src, kind="Source")
    workspace.require(src, role="Source", command="mv")
    workspace.require(dst, role="Destination", command="mv")
    parent = dst.parent
    return MovePlan(src, dst, create_parent=None if _stat(parent) is not None else parent)


def _missing_ancestors(path: Path) -> list[Path]:
    """*path* and each of its missing ancestors, deepest first."""
    missing: list[Path] = []
    current = path
    while not os.path.lexists(current) and current.parent != current:
        missing.append(current)
        current = current.parent
    return missing


def _undo_mkdirs(created: list[Path]) -> None:
    for directory in created:
        try:
            os.rmdir(directory)
        except FileNotFoundError:
            continue
        except OSError as e:
            get_logger().warning("Could not remove created directory %s: %s", directory, e)
            return


def execute_move(plan: MovePlan) -> MoveResult:
    """Create the destination's parent if needed, then rename in one call.

    When the rename fails, the directories created for it are removed again.
    """
    logger = get_logger()
    created: list[Path] = []
    if plan.create_parent is not None:
        created = _missing_ancestors(plan.create_parent)
        try:
            plan.create_parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            _undo_mkdirs(created)
            raise MutationError("create directory", plan.create_parent, e) from e
        logger.info("Created directory %s", plan.create_parent)
    try:
        os.rename(plan.source, plan.destination)
    except OSError as e:
        _undo_mkdirs(created)
        raise MutationError("move", plan.source, e) from e
    logger.info("Moved %s -> %s", plan.source, plan.destination)
    return MoveResult(plan.source, plan.destination, plan.create_parent)


def move_path(workspace: Workspace, source: str, destination: str) -> MoveResult:
    return execute_move(plan_move(workspace, source, destination))


# --- remove ---


@dataclass
class RemovalTarget:
    path: Path
    relative: str
    workspace_relative: str
    is_dir: bool

    @property
    def kind(self) -> str:
        return "directory" if self.is_dir else "file"


@dataclass
class RemovalPlan:
    targets: list[RemovalTarget] = field(default_factory=list)


@dataclass
class RemovalReport:
    removed: list[RemovalTarget] = field(default_factory=list)
    failures: list[tuple[RemovalTarget, MutationError]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.removed)

    @property
    def ok(self) -> bool:
        return not self.failures


def _is_real_dir(path: Path) -> bool:
    """Directory check that does not follow symlinks."""
    return stat.S_ISDIR(os.lstat(path).st_mode)


def plan_removal(workspace: Workspace, targets: list[str], recursive: bool = False) -> RemovalPlan:
    """Validate every target. Any failure aborts before anything is removed."""
    plan = RemovalPlan()
    for raw in targets:
        path = workspace.require(raw, role="Target", command="rm")
        st = _stat(path, follow_symlinks=False)
        if st is None:
            raise TargetMissingError(path)
        is_dir = stat.S_ISDIR(st.st_mode)
        if is_dir and not recursive:
            raise TypeMismatchError(
                f"{path} is a directory",
                path,
                hint="Use --recursive to remove directories",
            )
        plan.targets.append(
            RemovalTarget(
                path=path,
                relative=workspace.relative_to_cwd(path),
                workspace_relative=workspace.relative(path),
                is_dir=is_dir,
            )
        )
    return plan


def remove_tree(path: Path) -> None:
    """Remove *path* depth-first: children before their directory.

    Symlinks are unlinked, never followed. The first failing entry raises
    OSError naming that entry.
    """
    if not _is_real_dir(path):
        os.unlink(path)
        return
    with os.scandir(path) as it:
        children = [Path(entry.path) for entry in it]
    for child in children:
        remove_tree(child)
    os.rmdir(path)


def execute_removal(
    plan: RemovalPlan,
    on_result: Optional[Callable[[RemovalTarget, Optional[MutationError]], None]] = None,
) -> RemovalReport:
    """Remove every planned target. A failure is recorded and the rest continue."""
    logger = get_logger()
    report = RemovalReport()
    for target in plan.targets:
        error: Optional[MutationError] = None
        try:
            if target.is_dir:
                remove_tree(target.path)
            else:
                os.unlink(target.path)
        except OSError as e:
            error = MutationError("remove", target.path, e)
            report.failures.append((target, error))
            logger.warning("Remove failed path=%s error=%s", target.path, e)
        else:
            report.removed.append(target)
            logger.info("Removed %s %s", target.kind, target.path)
        if on_result is not None:
            on_result(target, error)
    return report


def remove_paths(workspace: Workspace, targets: list[str], recursive: bool = False) -> RemovalReport:
    return execute_removal(plan_removal(workspace, targets, recursive=recursive))
