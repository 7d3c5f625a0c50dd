"""Tests for error classification."""

from pathlib import Path

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


class TestErrorTypes:
    def test_workspace_not_found(self):
        err = WorkspaceNotFoundError()
        assert err.category == ErrorCategory.ROOT_NOT_FOUND
        assert err.message == "Could not find workspace root"
        assert ".code-workspace" in err.details[0]

    def test_target_missing(self):
        err = TargetMissingError(Path("/w/gone.txt"))
        assert err.category == ErrorCategory.TARGET_MISSING
        assert str(err) == "File does not exist: /w/gone.txt"

    def test_boundary_error_details(self):
        err = WorkspaceBoundaryError(Path("/etc"), Path("/w"), role="Target", command="rm")
        assert err.category == ErrorCategory.CONTAINMENT_VIOLATION
        assert err.details == [
            "Target: /etc",
            "Workspace: /w",
            "Use regular 'rm' if you need to work outside the workspace",
        ]

    def test_boundary_error_without_command_has_no_hint(self):
        err = WorkspaceBoundaryError(Path("/etc"), Path("/w"))
        assert len(err.details) == 2

    def test_type_mismatch_hint(self):
        err = TypeMismatchError("/w/src is a directory", Path("/w/src"), hint="Use --recursive to remove directories")
        assert err.category == ErrorCategory.TYPE_MISMATCH
        assert err.details == ["Use --recursive to remove directories"]

    def test_mutation_error_wraps_os_error(self):
        original = PermissionError(13, "Permission denied", "/w/a")
        err = MutationError("remove", Path("/w/a"), original)
        assert err.category == ErrorCategory.MUTATION_FAILURE
        assert err.original is original
        assert err.message == "Failed to remove /w/a: Permission denied"

    def test_mutation_error_names_failing_child(self):
        original = PermissionError(13, "Permission denied", "/w/dir/locked")
        err = MutationError("remove", Path("/w/dir"), original)
        assert err.message == "Failed to remove /w/dir: Permission denied: /w/dir/locked"

    def test_usage_error(self):
        err = UsageError("Please provide a target directory", "cd-vs-local <directory>")
        assert err.category == ErrorCategory.INVALID_INPUT
        assert err.details[0] == "Usage: cd-vs-local <directory>"

    def test_all_share_base(self):
        for err in (WorkspaceNotFoundError(), TargetMissingError(Path("/x")), UsageError("m", "u")):
            assert isinstance(err, VSLocalError)

    def test_path_access_error_is_classified(self):
        err = PathAccessError(Path("/w/x"), OSError(36, "File name too long", "/w/x"))
        assert err.message == "Cannot access /w/x: File name too long"
        assert err.category == ErrorCategory.MUTATION_FAILURE

        denied = PathAccessError(Path("/w/x"), PermissionError(13, "Permission denied"))
        assert "Permission denied" in denied.message

    def test_to_dict(self):
        data = TargetMissingError(Path("/x")).to_dict()
        assert data["type"] == "TargetMissingError"
        assert data["category"] == "target_missing"


class TestClassifyError:
    def test_vslocal_error_keeps_category(self):
        assert classify_error(WorkspaceNotFoundError()) == ErrorCategory.ROOT_NOT_FOUND

    def test_file_not_found(self):
        assert classify_error(FileNotFoundError("x")) == ErrorCategory.TARGET_MISSING

    def test_not_a_directory(self):
        assert classify_error(NotADirectoryError("x")) == ErrorCategory.TYPE_MISMATCH
        assert classify_error(IsADirectoryError("x")) == ErrorCategory.TYPE_MISMATCH

    def test_other_os_errors(self):
        assert classify_error(PermissionError("x")) == ErrorCategory.MUTATION_FAILURE
        assert classify_error(OSError(16, "Device or resource busy")) == ErrorCategory.MUTATION_FAILURE

    def test_value_error(self):
        assert classify_error(ValueError("bad")) == ErrorCategory.INVALID_INPUT

    def test_unknown(self):
        assert classify_error(RuntimeError("?")) == ErrorCategory.UNKNOWN
