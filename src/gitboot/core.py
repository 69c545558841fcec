"""Core helpers for gitboot.

This module holds the exception hierarchy, the subprocess wrapper used by
every step, and the XDG paths gitboot reads its settings from.
"""

import os
import shlex
import shutil
import subprocess
from pathlib import Path

from rich import print as rprint
from rich.markup import escape

# XDG Base Directory paths
CONFIG_DIR = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config")) / "gitboot"


class GitbootError(Exception):
    """Custom exception for fatal gitboot failures."""

    pass


class ManualInstallRequired(GitbootError):
    """No supported installation mechanism was found on this host."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class SetupCancelled(Exception):
    """The user chose to stop early. Not an error."""

    pass


def command_exists(name: str) -> bool:
    """Return True if ``name`` resolves on the command search path."""
    return shutil.which(name) is not None


def format_command(cmd: list[str]) -> str:
    return " ".join(shlex.quote(part) for part in cmd)


def run_command(
    cmd: list[str],
    capture_output: bool = False,
    check: bool = True,
    echo: bool = True,
) -> subprocess.CompletedProcess:
    """Run a command with error handling

    With ``check`` disabled the completed process is returned regardless of
    its exit status; a missing executable is still reported as an error.
    """
    if echo:
        rprint(f"[dim]$ {escape(format_command(cmd))}[/dim]")
    try:
        result = subprocess.run(
            cmd, capture_output=capture_output, text=True, check=check
        )
        return result
    except subprocess.CalledProcessError as e:
        raise GitbootError(
            f"Command failed: {' '.join(cmd)}\n{e.stderr if e.stderr else str(e)}"
        )
    except FileNotFoundError:
        raise GitbootError(f"Command not found: {cmd[0]}")
