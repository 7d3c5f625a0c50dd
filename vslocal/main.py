"""vslocal CLI entry points using Typer.

``cd-vs-local``, ``mv-vs-local`` and ``rm-vs-local`` are single-command apps;
``vslocal`` groups the same commands plus ``root`` and ``shell-init``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from vslocal.core.config import load_settings
from vslocal.core.errors import UsageError, VSLocalError, classify_error
from vslocal.core.logging import log_error, log_operation, setup_logging
from vslocal.core.operations import (
    RemovalTarget,
    change_directory,
    check_paths,
    execute_move,
    execute_removal,
    plan_move,
    plan_removal,
)
from vslocal.core.shell import shell_init_script
from vslocal.core.workspace import Workspace
from vslocal.ui import configure, error, escape, info, plain, success, warn

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

CD_USAGE = "cd-vs-local <directory>"
MV_USAGE = "mv-vs-local <source> <destination>"
RM_USAGE = "rm-vs-local [options] <file1> [file2] ..."


def _yes_no(flag: bool) -> str:
    return "[green]Yes[/]" if flag else "[red]No[/]"


def _report(err: VSLocalError, command: str, targets: list[str]) -> None:
    error(escape(err.message), [escape(line) for line in err.details])
    log_error(err.category.value, err.message, command=command, targets=",".join(targets))


def _open_workspace(command: str) -> Workspace:
    """Configure logging/console and locate the workspace around the CWD."""
    try:
        settings = load_settings()
    except ValidationError as e:
        error(
            escape(f"Invalid VSLOCAL_* settings: {e.error_count()} error(s)"),
            [escape(str(err["msg"])) for err in e.errors()],
        )
        raise typer.Exit(1)
    configure(no_color=settings.no_color)
    try:
        setup_logging(
            log_level=settings.log_level,
            logs_dir=settings.logs_dir,
            log_file=settings.log_file,
            console_level=settings.console_log_level,
        )
    except OSError as e:
        error(
            escape(f"Could not open log directory {settings.logs_dir}: {e.strerror or e}"),
            ["Check VSLOCAL_LOGS_DIR"],
        )
        raise typer.Exit(1)
    cwd = Path.cwd()
    try:
        return Workspace.discover(cwd)
    except VSLocalError as e:
        _report(e, command, [str(cwd)])
        raise typer.Exit(1)
    except OSError as e:
        _report_os_error(e, command)
        raise typer.Exit(1)


def _report_os_error(err: OSError, command: str) -> None:
    error(escape(f"Could not read {err.filename}: {err.strerror or err}"))
    log_error(classify_error(err).value, str(err), command=command)


def _show_root(workspace: Workspace) -> None:
    success(f"Workspace root: {escape(str(workspace.root))}")
    if workspace.marker:
        info(f"Marker: {escape(workspace.marker)}")


# --- cd ---


def cd_command(
    target: Optional[str] = typer.Argument(None, help="Directory to change into"),
    check: bool = typer.Option(False, "--check", help="Just check if the path is within the workspace (no cd)"),
    show_root: bool = typer.Option(False, "--show-root", help="Show the detected workspace root"),
) -> None:
    """Change directory while staying within workspace bounds.

    Finds the workspace root (.vscode/, .git/, package.json, *.code-workspace)
    and refuses to leave it. On success prints CHANGE_DIR=<path> for the
    shell wrapper (see `vslocal shell-init`).
    """
    workspace = _open_workspace("cd")
    if show_root:
        _show_root(workspace)
        return

    if target is None:
        _report(UsageError("Please provide a target directory", CD_USAGE), "cd", [])
        raise typer.Exit(1)

    if check:
        [result] = check_paths(workspace, [target])
        plain(f"Path: {escape(str(result.path))}")
        plain(f"Workspace: {escape(str(workspace.root))}")
        plain(f"Within workspace: {_yes_no(result.within)}")
        raise typer.Exit(0 if result.within else 1)

    try:
        result = change_directory(workspace, target)
    except VSLocalError as e:
        _report(e, "cd", [target])
        raise typer.Exit(1)
    except OSError as e:
        _report_os_error(e, "cd")
        raise typer.Exit(1)

    success(f"cd {escape(result.relative)}")
    info(escape(str(result.target)))
    info(f"Workspace: {escape(result.workspace_relative)}")
    # Raw line, never styled or wrapped
    typer.echo(result.handoff)
    log_operation("cd", workspace.root, [str(result.target)])


# --- mv ---


def mv_command(
    paths: Optional[list[str]] = typer.Argument(None, help="SOURCE and DESTINATION"),
    check: bool = typer.Option(False, "--check", help="Just check if both paths are within the workspace (no move)"),
    show_root: bool = typer.Option(False, "--show-root", help="Show the detected workspace root"),
) -> None:
    """Move/rename a file or directory while staying within workspace bounds.

    Both endpoints are checked before anything moves. Missing parent
    directories of the destination are created.
    """
    workspace = _open_workspace("mv")
    if show_root:
        _show_root(workspace)
        return

    if not paths or len(paths) != 2:
        _report(UsageError("Please provide source and destination paths", MV_USAGE), "mv", paths or [])
        raise typer.Exit(1)

    source, destination = paths
    if check:
        src_check, dst_check = check_paths(workspace, paths, labels=["Source", "Destination"])
        plain(f"Source: {escape(str(src_check.path))}")
        plain(f"Destination: {escape(str(dst_check.path))}")
        plain(f"Workspace: {escape(str(workspace.root))}")
        plain(f"Source within workspace: {_yes_no(src_check.within)}")
        plain(f"Destination within workspace: {_yes_no(dst_check.within)}")
        raise typer.Exit(0 if src_check.within and dst_check.within else 1)

    try:
        plan = plan_move(workspace, source, destination)
        result = execute_move(plan)
    except VSLocalError as e:
        _report(e, "mv", paths)
        raise typer.Exit(1)
    except OSError as e:
        _report_os_error(e, "mv")
        raise typer.Exit(1)

    if result.created_dir is not None:
        info(f"Created directory: {escape(str(result.created_dir))}")
    rel_source = escape(workspace.relative_to_cwd(result.source))
    rel_dest = escape(workspace.relative_to_cwd(result.destination))
    success(f"mv {rel_source} -> {rel_dest}")
    info(f"{escape(str(result.source))} -> {escape(str(result.destination))}")
    info(
        f"Workspace: {escape(workspace.relative(result.source))} -> "
        f"{escape(workspace.relative(result.destination))}"
    )
    log_operation("mv", workspace.root, [str(result.source), str(result.destination)])


# --- rm ---


def rm_command(
    targets: Optional[list[str]] = typer.Argument(None, help="Files or directories to remove"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Remove directories recursively"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip the pending-removal listing"),
    check: bool = typer.Option(False, "--check", help="Just check if the paths are within the workspace (no removal)"),
    show_root: bool = typer.Option(False, "--show-root", help="Show the detected workspace root"),
) -> None:
    """Remove files while staying within workspace bounds.

    Every target is validated before the first one is removed. Directories
    need --recursive.
    """
    workspace = _open_workspace("rm")
    if show_root:
        _show_root(workspace)
        return

    if not targets:
        _report(
            UsageError("Please provide at least one file or directory to remove", RM_USAGE),
            "rm",
            [],
        )
        raise typer.Exit(1)

    if check:
        checks = check_paths(workspace, targets)
        plain(f"Workspace: {escape(str(workspace.root))}")
        for result in checks:
            verdict = "[green]Within workspace[/]" if result.within else "[red]Outside workspace[/]"
            plain(f"{escape(str(result.path))}: {verdict}")
        raise typer.Exit(0 if all(c.within for c in checks) else 1)

    try:
        plan = plan_removal(workspace, targets, recursive=recursive)
    except VSLocalError as e:
        _report(e, "rm", targets)
        raise typer.Exit(1)
    except OSError as e:
        _report_os_error(e, "rm")
        raise typer.Exit(1)

    # Display only; there is no interactive pause
    if not force:
        plain("Will remove:")
        for target in plan.targets:
            plain(
                f"  {target.kind}: {escape(target.relative)} "
                f"(workspace: {escape(target.workspace_relative)})"
            )
        warn("Proceeding with removal (use --force to skip this message)")

    def _on_result(target: RemovalTarget, err: Optional[VSLocalError]) -> None:
        if err is not None:
            error(escape(err.message))
        else:
            success(f"Removed {target.kind}: {escape(target.relative)}")

    report = execute_removal(plan, on_result=_on_result)

    if report.count:
        success(f"Removed {report.count} item(s)")
        info(f"Workspace: {escape(', '.join(t.workspace_relative for t in report.removed))}")
    if not report.ok:
        warn(f"{len(report.failures)} item(s) could not be removed")
        log_operation(
            "rm",
            workspace.root,
            [str(t.path) for t, _ in report.failures],
            error="; ".join(e.message for _, e in report.failures),
        )
        raise typer.Exit(1)
    log_operation("rm", workspace.root, [str(t.path) for t in report.removed])


# --- vslocal group ---


app = typer.Typer(
    name="vslocal",
    help="Workspace-bounded cd, mv and rm.",
    no_args_is_help=True,
    add_completion=False,
    context_settings=CONTEXT_SETTINGS,
)
app.command("cd")(cd_command)
app.command("mv")(mv_command)
app.command("rm")(rm_command)


@app.command()
def root() -> None:
    """Show the detected workspace root."""
    _show_root(_open_workspace("root"))


@app.command("shell-init")
def shell_init() -> None:
    """Print shell functions that make cd-vs-local change directory.

    Add `eval "$(vslocal shell-init)"` to ~/.bashrc or ~/.zshrc.
    """
    typer.echo(shell_init_script(), nl=False)


def _single(command) -> typer.Typer:
    single = typer.Typer(add_completion=False, context_settings=CONTEXT_SETTINGS)
    single.command(context_settings=CONTEXT_SETTINGS)(command)
    return single


cd_app = _single(cd_command)
mv_app = _single(mv_command)
rm_app = _single(rm_command)


if __name__ == "__main__":
    app()
