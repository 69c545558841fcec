"""Git installation.

Dispatches on the detected OS to the native package manager, and degrades
to manual download instructions when no supported mechanism is available.
"""

import shutil
from pathlib import Path
from typing import Mapping

from rich import print as rprint

from .core import (
    GitbootError,
    ManualInstallRequired,
    SetupCancelled,
    command_exists,
    run_command,
)
from .platform_utils import (
    LinuxDistro,
    OSKind,
    detect_linux_distro,
    in_posix_layer,
    is_root,
)
from .prompts import Prompter

DOWNLOAD_URL = "https://git-scm.com/downloads"
MAC_DOWNLOAD_URL = "https://git-scm.com/download/mac"
WINDOWS_DOWNLOAD_URL = "https://git-scm.com/download/win"
HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"

# Apple Silicon first, then Intel
BREW_LOCATIONS = [Path("/opt/homebrew/bin/brew"), Path("/usr/local/bin/brew")]

LINUX_INSTALL_COMMANDS: dict[LinuxDistro, tuple[str, list[list[str]]]] = {
    LinuxDistro.DEBIAN: (
        "apt-get",
        [["apt-get", "update"], ["apt-get", "install", "-y", "git"]],
    ),
    LinuxDistro.FEDORA: ("dnf", [["dnf", "install", "-y", "git"]]),
    LinuxDistro.REDHAT: ("yum", [["yum", "install", "-y", "git"]]),
}


def ensure_git(
    os_kind: OSKind,
    prompter: Prompter,
    indicator: str = "",
    root: Path = Path("/"),
    environ: Mapping[str, str] | None = None,
) -> None:
    """Make sure git is on PATH, installing it if needed.

    Raises SetupCancelled if git is already present and the user does not
    want to continue, ManualInstallRequired when no supported installer is
    found, and GitbootError when an installation step fails.
    """
    if command_exists("git"):
        version = git_version()
        rprint(f"[green]Git is already installed: {version}[/green]")
        if not prompter.confirm("Do you want to continue with the configuration?", default=True):
            raise SetupCancelled("Nothing to do, git is already installed.")
        return

    rprint("[blue]Git is not installed. Installing...[/blue]")

    if os_kind is OSKind.LINUX:
        _install_linux(detect_linux_distro(root))
    elif os_kind is OSKind.MACOS:
        _install_macos(prompter)
    elif os_kind is OSKind.WINDOWS:
        _install_windows(indicator, environ)
    else:
        raise ManualInstallRequired(
            "Unsupported operating system. Please install git manually.",
            DOWNLOAD_URL,
        )

    if not command_exists("git"):
        raise GitbootError("Git installation failed: git is still not on your PATH")

    rprint(f"[green]Git installed successfully: {git_version()}[/green]")


def git_version() -> str:
    result = run_command(["git", "--version"], capture_output=True, echo=False)
    return result.stdout.strip()


def _privileged(cmd: list[str]) -> list[str]:
    if is_root() or not command_exists("sudo"):
        return cmd
    return ["sudo", *cmd]


def _run_install_step(manager: str, cmd: list[str]):
    try:
        run_command(cmd)
    except GitbootError as e:
        raise GitbootError(f"Failed to install git using {manager}: {e}")


def _install_linux(distro: LinuxDistro):
    if distro not in LINUX_INSTALL_COMMANDS:
        raise ManualInstallRequired(
            "Unsupported Linux distribution. Please install git with your package manager.",
            DOWNLOAD_URL,
        )

    manager, steps = LINUX_INSTALL_COMMANDS[distro]
    rprint(f"[blue]Detected {distro.value} family, using {manager}[/blue]")
    for cmd in steps:
        _run_install_step(manager, _privileged(cmd))


def find_brew() -> str | None:
    """Locate the Homebrew executable, even when it is not on PATH yet."""
    found = shutil.which("brew")
    if found:
        return found
    for candidate in BREW_LOCATIONS:
        if candidate.exists():
            return str(candidate)
    return None


def _install_homebrew():
    rprint("[blue]Installing Homebrew...[/blue]")
    try:
        script = run_command(
            ["curl", "-fsSL", HOMEBREW_INSTALL_URL], capture_output=True
        ).stdout
        run_command(["/bin/bash", "-c", script], echo=False)
    except GitbootError as e:
        raise GitbootError(f"Failed to install Homebrew: {e}")


def _install_macos(prompter: Prompter):
    brew = find_brew()
    if brew is None:
        rprint("[yellow]Homebrew is not installed.[/yellow]")
        if not prompter.confirm("Would you like to install Homebrew?", default=True):
            raise ManualInstallRequired(
                "Please install git manually.", MAC_DOWNLOAD_URL
            )
        _install_homebrew()
        brew = find_brew()
        if brew is None:
            raise GitbootError("Homebrew installation finished but brew was not found")

    _run_install_step("Homebrew", [brew, "install", "git"])


def _install_windows(indicator: str, environ: Mapping[str, str] | None = None):
    if in_posix_layer(indicator, environ):
        # Git for Windows ships its own bash; nothing to install from here.
        rprint("[blue]Running inside Git Bash/MSYS, checking for git...[/blue]")
        return

    if command_exists("winget"):
        _run_install_step(
            "winget",
            ["winget", "install", "--id", "Git.Git", "-e", "--source", "winget"],
        )
    elif command_exists("choco"):
        _run_install_step("Chocolatey", ["choco", "install", "git", "-y"])
    else:
        raise ManualInstallRequired(
            "No supported package manager found (winget or Chocolatey). "
            "Please install Git for Windows manually.",
            WINDOWS_DOWNLOAD_URL,
        )
