"""Error classification for vslocal commands."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class ErrorCategory(Enum):
    """Categories of errors a command can end with."""
    ROOT_NOT_FOUND = "root_not_found"                  # No ancestor holds a marker
    TARGET_MISSING = "target_missing"                  # Resolved path does not exist
    CONTAINMENT_VIOLATION = "containment_violation"    # Resolved path is outside the root
    TYPE_MISMATCH = "type_mismatch"                    # File vs directory mismatch
    MUTATION_FAILURE = "mutation_failure"              # rename/unlink/rmdir raised
    INVALID_INPUT = "invalid_input"                    # Bad arguments
    UNKNOWN = "unknown"


class VSLocalError(Exception):
    """Base exception for vslocal errors.

    ``details`` are extra lines shown indented under the message.
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        details: Optional[list[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.details = list(details or [])

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": type(self).__name__,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }


class WorkspaceNotFoundError(VSLocalError):
    """No ancestor of the current directory is a workspace root."""

    def __init__(self, message: str = "Could not find workspace root"):
        super().__init__(
            message,
            ErrorCategory.ROOT_NOT_FOUND,
            details=["(looked for .vscode/, .git/, package.json, *.code-workspace)"],
        )


class TargetMissingError(VSLocalError):
    """A resolved target does not exist."""

    def __init__(self, path: Path, kind: str = "File"):
        super().__init__(f"{kind} does not exist: {path}", ErrorCategory.TARGET_MISSING)
        self.path = path


class WorkspaceBoundaryError(VSLocalError):
    """Raised when an operation attempts to escape the workspace root."""

    def __init__(self, path: Path, root: Path, role: str = "Target", command: str = ""):
        details = [f"{role}: {path}", f"Workspace: {root}"]
        if command:
            details.append(f"Use regular '{command}' if you need to work outside the workspace")
        super().__init__(
            f"{role} is outside workspace bounds",
            ErrorCategory.CONTAINMENT_VIOLATION,
            details=details,
        )
        self.path = path
        self.root = root
        self.role = role


class TypeMismatchError(VSLocalError):
    """Directory given where a file was expected, or the reverse."""

    def __init__(self, message: str, path: Path, hint: Optional[str] = None):
        super().__init__(message, ErrorCategory.TYPE_MISMATCH, details=[hint] if hint else None)
        self.path = path


class MutationError(VSLocalError):
    """The underlying filesystem call failed."""

    def __init__(self, action: str, path: Path, original: OSError):
        reason = original.strerror or str(original)
        if original.filename is not None and os.fspath(original.filename) != os.fspath(path):
            reason = f"{reason}: {original.filename}"
        super().__init__(f"Failed to {action} {path}: {reason}", ErrorCategory.MUTATION_FAILURE)
        self.action = action
        self.path = path
        self.original = original


class PathAccessError(VSLocalError):
    """A path could not be inspected (too long, permission denied, ...)."""

    def __init__(self, path: Path, original: OSError):
        reason = original.strerror or str(original)
        super().__init__(f"Cannot access {path}: {reason}", classify_error(original))
        self.path = path
        self.original = original


class UsageError(VSLocalError):
    """Wrong number or kind of arguments."""

    def __init__(self, message: str, usage: str):
        super().__init__(
            message,
            ErrorCategory.INVALID_INPUT,
            details=[f"Usage: {usage}", "Use --help for more information"],
        )


def classify_error(error: Exception) -> ErrorCategory:
    """Map any exception raised during a command to an ErrorCategory."""
    if isinstance(error, VSLocalError):
        return error.category
    if isinstance(error, FileNotFoundError):
        return ErrorCategory.TARGET_MISSING
    if isinstance(error, (NotADirectoryError, IsADirectoryError)):
        return ErrorCategory.TYPE_MISMATCH
    if isinstance(error, OSError):
        return ErrorCategory.MUTATION_FAILURE
    if isinstance(error, ValueError):
        return ErrorCategory.INVALID_INPUT
    return ErrorCategory.UNKNOWN
