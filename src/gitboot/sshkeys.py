"""SSH key setup.

Generates a key pair for the hosting service, loads it into ssh-agent and
prints the public key so the user can register it.
"""

import os
import re
from pathlib import Path
from typing import Any

from rich import print as rprint
from rich.markup import escape

from .config import get_config_value
from .core import GitbootError, run_command
from .gitconfig import ConfigStore
from .prompts import Prompter

_AGENT_VAR_RE = re.compile(r"(SSH_AUTH_SOCK|SSH_AGENT_PID)=([^;]+);")


def default_key_path(key_type: str) -> Path:
    return Path.home() / ".ssh" / f"id_{key_type}"


def public_key_path(key_path: Path) -> Path:
    return key_path.with_name(key_path.name + ".pub")


def resolve_key_path(prompter: Prompter, key_type: str) -> Path:
    """Ask for a custom key location, falling back to the default one."""
    default = default_key_path(key_type)
    if prompter.confirm(f"Use a custom path for the SSH key? (default: {default})"):
        custom = prompter.ask("Enter the key path").strip()
        if custom:
            return Path(os.path.expandvars(custom)).expanduser()
        rprint(f"[yellow]No path given, using {default}[/yellow]")
    return default


def ensure_ssh_dir(key_path: Path):
    """Create the key's directory with owner-only permissions.

    Only the key's own directory is tightened; intermediate directories
    created along the way keep the umask mode. An already existing
    directory is only tightened when it is a .ssh directory, so a custom
    path under a shared location is left alone.
    """
    directory = key_path.parent
    if not directory.exists():
        directory.mkdir(parents=True)
        directory.chmod(0o700)
    elif directory.name == ".ssh":
        directory.chmod(0o700)


def keygen_command(key_type: str, key_path: Path, email: str, rsa_bits: int = 4096) -> list[str]:
    cmd = ["ssh-keygen", "-t", key_type]
    if key_type == "rsa":
        cmd.extend(["-b", str(rsa_bits)])
    cmd.extend(["-C", email, "-f", str(key_path)])
    return cmd


def start_agent() -> bool:
    """Start ssh-agent and export its variables into this process.

    The agent is left running after gitboot exits.
    """
    try:
        result = run_command(["ssh-agent", "-s"], capture_output=True)
    except GitbootError as e:
        rprint(f"[yellow]Warning: Could not start ssh-agent: {escape(str(e))}[/yellow]")
        return False

    for name, value in _AGENT_VAR_RE.findall(result.stdout):
        os.environ[name] = value
    return True


def add_to_agent(key_path: Path):
    if not start_agent():
        return
    try:
        run_command(["ssh-add", str(key_path)])
        rprint("[green]Key added to ssh-agent[/green]")
    except GitbootError as e:
        rprint(f"[yellow]Warning: Could not add key to ssh-agent: {escape(str(e))}[/yellow]")


def print_public_key(pub_path: Path, keys_url: str | None = None):
    rprint("\n[bold]Your public SSH key:[/bold]")
    print(pub_path.read_text(encoding="utf-8").rstrip("\n"))
    if keys_url:
        rprint(f"\n[blue]Add this key to your account at: {escape(keys_url)}[/blue]")


def _discard(*paths: Path):
    for path in paths:
        if path.exists():
            path.unlink()


def generate_key(key_type: str, key_path: Path, email: str, rsa_bits: int = 4096, replace: bool = False):
    """Run ssh-keygen for ``key_path``.

    With ``replace`` the new pair is generated beside the existing one and
    moved over it only once ssh-keygen succeeds, so a failed or interrupted
    run leaves the old key untouched.
    """
    target = key_path.with_name(key_path.name + ".new") if replace else key_path
    staged = (target, public_key_path(target))
    if replace:
        _discard(*staged)

    try:
        run_command(keygen_command(key_type, target, email, rsa_bits))
    except GitbootError as e:
        if replace:
            _discard(*staged)
        raise GitbootError(f"Failed to generate SSH key: {e}")
    except KeyboardInterrupt:
        if replace:
            _discard(*staged)
        raise

    if replace:
        os.replace(staged[0], key_path)
        os.replace(staged[1], public_key_path(key_path))


def setup_ssh_key(
    store: ConfigStore,
    prompter: Prompter,
    settings: dict[str, Any],
) -> Path | None:
    """Generate (or reuse) an SSH key pair.

    Returns the private key path of a newly generated key, or None if an
    existing key was kept.
    """
    key_type = get_config_value(settings, "ssh.key_type", "ed25519")
    rsa_bits = get_config_value(settings, "ssh.rsa_bits", 4096)
    keys_url = get_config_value(settings, "hosting.keys_url")

    rprint("\n[bold cyan]SSH key setup[/bold cyan]")
    key_path = resolve_key_path(prompter, key_type)
    ensure_ssh_dir(key_path)

    pub_path = public_key_path(key_path)
    replace = False
    if pub_path.exists():
        rprint(f"[yellow]An SSH key already exists at {escape(str(pub_path))}[/yellow]")
        if not prompter.confirm("Do you want to overwrite it?"):
            print_public_key(pub_path)
            return None
        replace = True

    configured_email = store.get("user.email") or ""
    email = prompter.ask("Enter the email for the SSH key", default=configured_email).strip()
    if not email:
        email = configured_email

    if key_type == "rsa":
        rprint(
            "[yellow]Warning: RSA keys are being phased out by hosting services; "
            "consider ssh.key_type = \"ed25519\"[/yellow]"
        )

    rprint(f"[blue]Generating a new {key_type} SSH key...[/blue]")
    generate_key(key_type, key_path, email, rsa_bits, replace=replace)

    add_to_agent(key_path)
    print_public_key(pub_path, keys_url)
    return key_path
