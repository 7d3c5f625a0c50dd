"""Minimal Rich console helpers."""

import io
import sys

from rich.console import Console
from rich.markup import escape

# Force UTF-8 on Windows so paths with non-ASCII names print
if sys.platform == "win32" and not isinstance(sys.stdout, io.TextIOWrapper):
    pass  # non-standard stdout, leave it alone
elif sys.platform == "win32":
    try:
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    except (AttributeError, OSError):
        pass

# soft_wrap keeps long paths on a single line; emoji codes like :smile: in
# file names are printed as written
console = Console(soft_wrap=True, highlight=False, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)


def configure(no_color: bool = False) -> None:
    console.no_color = no_color
    err_console.no_color = no_color


def info(msg: str) -> None:
    console.print(f"[bold blue]\\[i][/] {msg}")


def success(msg: str) -> None:
    console.print(f"[bold green]\\[+][/] {msg}")


def warn(msg: str) -> None:
    console.print(f"[bold yellow]\\[!][/] {msg}")


def error(msg: str, details: list[str] | None = None) -> None:
    """Print an error and its indented detail lines to stderr."""
    err_console.print(f"[bold red]\\[-][/] {msg}")
    for line in details or []:
        err_console.print(f"    {line}")


def plain(msg: str) -> None:
    console.print(msg)


__all__ = ["console", "err_console", "configure", "escape", "info", "success", "warn", "error", "plain"]
