"""Shared test fixtures and pytest configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from vslocal.core.logging import reset_logger
from vslocal.core.workspace import find_workspace_root


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch):
    """Drop VSLOCAL_* settings and the logger singleton around every test."""
    for name in ("LOG_LEVEL", "CONSOLE_LOG_LEVEL", "LOGS_DIR", "LOG_FILE", "NO_COLOR"):
        monkeypatch.delenv(f"VSLOCAL_{name}", raising=False)
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """A resolved temp directory with no workspace marker above it."""
    base = tmp_path.resolve()
    if find_workspace_root(base) is not None:
        pytest.skip("temp directory is already inside a workspace")
    return base


@pytest.fixture
def project(base_dir: Path) -> Path:
    """A git workspace with a few files and an outside sibling directory.

    project/
        .git/
        README.md
        src/app.py
        src/pkg/mod.py
        docs/
    outside/
        secret.txt
    """
    root = base_dir / "project"
    (root / ".git").mkdir(parents=True)
    (root / "README.md").write_text("# Project\n")
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "src" / "app.py").write_text("print('app')\n")
    (root / "src" / "pkg" / "mod.py").write_text("VALUE = 1\n")
    (root / "docs").mkdir()

    outside = base_dir / "outside"
    outside.mkdir()
    (outside / "secret.txt").write_text("keep me\n")
    return root


@pytest.fixture
def outside(project: Path) -> Path:
    return project.parent / "outside"
