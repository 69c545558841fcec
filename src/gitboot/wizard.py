"""Top-to-bottom setup flow: detect, install, configure, SSH, connectivity."""

from typing import Any, Mapping

from rich import print as rprint

from .config import load_config
from .connectivity import check_connectivity
from .core import ManualInstallRequired
from .gitconfig import ConfigStore, GitConfigStore, configure_git
from .installer import DOWNLOAD_URL, ensure_git
from .platform_utils import OSKind, detect_os, os_indicator
from .prompts import Prompter, RichPrompter
from .sshkeys import setup_ssh_key


def run_wizard(
    prompter: Prompter | None = None,
    store: ConfigStore | None = None,
    settings: dict[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
):
    """Run the whole setup once. Exceptions are mapped to exit codes by the CLI."""
    prompter = prompter or RichPrompter()
    store = store or GitConfigStore()
    settings = settings or load_config()

    rprint("[bold cyan]Git installation and setup[/bold cyan]")

    indicator = os_indicator(environ)
    os_kind = detect_os(indicator)
    if os_kind is OSKind.UNKNOWN:
        raise ManualInstallRequired(
            f"Could not detect a supported operating system (OSTYPE={indicator!r}).",
            DOWNLOAD_URL,
        )
    rprint(f"[blue]Detected operating system: {os_kind.value}[/blue]")

    ensure_git(os_kind, prompter, indicator, environ=environ)
    configure_git(store, prompter, os_kind, settings)

    if prompter.confirm("\nWould you like to set up an SSH key?"):
        setup_ssh_key(store, prompter, settings)

    if prompter.confirm("\nWould you like to test the connection to the hosting service?"):
        check_connectivity(settings)

    rprint("\n[green]Git setup complete![/green]")
