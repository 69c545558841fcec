"""CLI entry for gitboot.

A single interactive command; outcomes of the wizard are mapped to exit
codes here and nowhere else.
"""

import sys

import typer
from rich import print as rprint
from rich.markup import escape

from gitboot.core import GitbootError, ManualInstallRequired, SetupCancelled
from gitboot.wizard import run_wizard

app = typer.Typer(
    help="Install git and walk through its first-time configuration",
    add_completion=False,
)


@app.command()
def setup():
    """Install git if needed, then configure identity, SSH key and connectivity.

    Every step is interactive; answer the prompts as they appear.
    """
    try:
        run_wizard()

    except SetupCancelled as e:
        rprint(f"[blue]{escape(str(e))}[/blue]")
        sys.exit(0)

    except ManualInstallRequired as e:
        rprint(f"[yellow]{escape(str(e))}[/yellow]")
        if e.url:
            rprint(f"[yellow]Download it from: {escape(e.url)}[/yellow]")
        sys.exit(1)

    except GitbootError as e:
        rprint(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    except (KeyboardInterrupt, EOFError):
        rprint("\n[red]Setup interrupted[/red]")
        sys.exit(1)
