"""Connectivity check against the hosting service."""

from typing import Any

from rich import print as rprint
from rich.markup import escape

from .config import get_config_value
from .core import GitbootError, run_command


def check_connectivity(settings: dict[str, Any]) -> bool:
    """Test SSH authentication and anonymous access to the hosting service.

    The SSH handshake output is shown as-is; only the ls-remote result
    decides the reported outcome. Never raises for a failed check.
    """
    host = get_config_value(settings, "hosting.host", "github.com")
    test_repo = get_config_value(
        settings, "hosting.test_repo", "https://github.com/octocat/Hello-World.git"
    )

    rprint(f"\n[bold cyan]Testing connection to {host}[/bold cyan]")
    try:
        # Exits 1 even on successful authentication, so the status is ignored.
        run_command(["ssh", "-T", f"git@{host}"], check=False)
    except GitbootError as e:
        rprint(f"[yellow]Warning: Could not run ssh: {escape(str(e))}[/yellow]")

    try:
        result = run_command(
            ["git", "ls-remote", test_repo], capture_output=True, check=False
        )
        reachable = result.returncode == 0
    except GitbootError:
        reachable = False

    if reachable:
        rprint(f"[green]Successfully reached {host} over HTTPS[/green]")
    else:
        rprint(f"[yellow]Could not reach {test_repo}[/yellow]")
        rprint("[yellow]There might be a network issue or a proxy blocking access.[/yellow]")
    return reachable
