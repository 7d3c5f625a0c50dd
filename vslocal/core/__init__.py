"""Core module - workspace detection, containment and the bounded operations."""

from vslocal.core.errors import (
    ErrorCategory,
    MutationError,
    PathAccessError,
    TargetMissingError,
    TypeMismatchError,
    UsageError,
    VSLocalError,
    WorkspaceBoundaryError,
    WorkspaceNotFoundError,
    classify_error,
)
from vslocal.core.workspace import (
    WORKSPACE_MARKERS,
    Workspace,
    detect_marker,
    find_workspace_root,
    is_within_workspace,
    resolve_path,
)
