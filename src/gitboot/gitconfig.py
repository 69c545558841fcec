"""Global git configuration.

The configurator talks to a ``ConfigStore`` rather than to git directly;
``GitConfigStore`` is the real one, backed by ``git config --global``.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from rich import print as rprint
from rich.markup import escape

from .config import get_config_value
from .core import GitbootError, run_command
from .platform_utils import OSKind
from .prompts import Prompter, ask_required


class ConfigStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def entries(self) -> list[tuple[str, str]]: ...


class GitConfigStore:
    """ConfigStore writing to the user's global git configuration."""

    def get(self, key: str) -> str | None:
        result = run_command(
            ["git", "config", "--global", "--get", key],
            capture_output=True,
            check=False,
            echo=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    def set(self, key: str, value: str) -> None:
        run_command(["git", "config", "--global", key, value])

    def entries(self) -> list[tuple[str, str]]:
        result = run_command(
            ["git", "config", "--global", "--list"],
            capture_output=True,
            check=False,
            echo=False,
        )
        if result.returncode != 0:
            return []
        pairs = []
        for line in result.stdout.splitlines():
            key, sep, value = line.partition("=")
            if sep:
                pairs.append((key, value))
        return pairs


@dataclass(frozen=True)
class Identity:
    name: str
    email: str


def credential_helper_for(os_kind: OSKind, cache_timeout: int = 3600) -> str | None:
    """Return the credential helper suited to the platform."""
    if os_kind is OSKind.MACOS:
        return "osxkeychain"
    if os_kind is OSKind.WINDOWS:
        return "manager"
    if os_kind is OSKind.LINUX:
        return f"cache --timeout={cache_timeout}"
    return None


def _set_required(store: ConfigStore, key: str, value: str):
    try:
        store.set(key, value)
    except GitbootError as e:
        raise GitbootError(f"Failed to set {key}: {e}")


def configure_git(
    store: ConfigStore,
    prompter: Prompter,
    os_kind: OSKind,
    settings: dict[str, Any],
) -> Identity:
    """Collect identity and preferences and write them as global config."""
    rprint("\n[bold cyan]Git configuration[/bold cyan]")

    name = ask_required(prompter, "Enter your name")
    _set_required(store, "user.name", name)

    email = ask_required(prompter, "Enter your email")
    _set_required(store, "user.email", email)

    branch = get_config_value(settings, "git.default_branch", "main")
    if prompter.confirm(f"Set the default branch name to '{branch}'?"):
        _set_required(store, "init.defaultBranch", branch)

    if prompter.confirm("Set a default editor?"):
        editor = prompter.ask("Enter the editor command (e.g. vim, nano, code --wait)")
        if editor:
            _set_required(store, "core.editor", editor)

    https_prefix = get_config_value(settings, "hosting.https_prefix", "https://github.com/")
    ssh_prefix = get_config_value(settings, "hosting.ssh_prefix", "git@github.com:")
    if prompter.confirm(f"Use SSH instead of HTTPS for {https_prefix} URLs?"):
        _set_required(store, f"url.{ssh_prefix}.insteadOf", https_prefix)

    timeout = get_config_value(settings, "git.credential_cache_timeout", 3600)
    helper = credential_helper_for(os_kind, timeout)
    if helper:
        try:
            store.set("credential.helper", helper)
        except GitbootError as e:
            rprint(f"[yellow]Warning: Could not configure credential helper: {escape(str(e))}[/yellow]")

    show_summary(store)
    return Identity(name=name, email=email)


def show_summary(store: ConfigStore):
    """Print the identity and URL rewrite entries of the global config."""
    rprint("\n[bold]Your git configuration:[/bold]")
    for key, value in store.entries():
        if "user" in key or "url" in key:
            rprint(f"  [cyan]{escape(key)}[/cyan] = {escape(value)}")
