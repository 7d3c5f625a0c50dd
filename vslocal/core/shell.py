"""Hand-off line between ``cd-vs-local`` and the calling shell.

A child process cannot change its parent's working directory, so on success
the command prints ``CHANGE_DIR=<path>`` and a shell function performs the
``cd`` itself.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

HANDOFF_PREFIX = "CHANGE_DIR="

_HANDOFF_RE = re.compile(r"^" + re.escape(HANDOFF_PREFIX) + r"(.*)$", re.MULTILINE)

SHELL_WRAPPER = """\
# vslocal shell integration: eval "$(vslocal shell-init)"
cd-vs-local() {
    local output exit_code new_dir
    output=$(command cd-vs-local "$@" 2>&1)
    exit_code=$?

    printf '%s\\n' "$output" | grep -v '^CHANGE_DIR='

    if [ $exit_code -eq 0 ]; then
        new_dir=$(printf '%s\\n' "$output" | sed -n 's/^CHANGE_DIR=//p' | head -n 1)
        if [ -n "$new_dir" ]; then
            builtin cd -- "$new_dir" || return $?
        fi
    fi

    return $exit_code
}

mv-vs-local() {
    command mv-vs-local "$@"
}

rm-vs-local() {
    command rm-vs-local "$@"
}
"""


def format_handoff(path: Path | str) -> str:
    """Build the line a shell wrapper turns into ``cd <path>``."""
    return f"{HANDOFF_PREFIX}{path}"


def parse_handoff(output: str) -> Optional[str]:
    """Return the directory carried by the first hand-off line in *output*."""
    match = _HANDOFF_RE.search(output)
    if match is None:
        return None
    return match.group(1).rstrip("\r")


def strip_handoff(output: str) -> str:
    """Drop hand-off lines, keeping everything the user should see."""
    return "\n".join(line for line in output.splitlines() if not line.startswith(HANDOFF_PREFIX))


def shell_init_script() -> str:
    return SHELL_WRAPPER
