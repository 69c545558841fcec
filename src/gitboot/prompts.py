"""Interactive prompts.

Every question the wizard asks goes through a ``Prompter`` so the flow can
be driven by a scripted implementation in tests.
"""

from typing import Protocol

from rich import print as rprint
from rich.console import Console
from rich.prompt import Confirm, Prompt


class Prompter(Protocol):
    def ask(self, question: str, default: str = "") -> str: ...

    def confirm(self, question: str, default: bool = False) -> bool: ...


class RichPrompter:
    """Prompter reading answers from standard input via rich."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def ask(self, question: str, default: str = "") -> str:
        answer = Prompt.ask(
            question,
            console=self.console,
            default=default,
            show_default=bool(default),
        )
        return answer.strip()

    def confirm(self, question: str, default: bool = False) -> bool:
        return Confirm.ask(question, console=self.console, default=default)


def ask_required(prompter: Prompter, question: str) -> str:
    """Ask until a non-empty answer is given."""
    while True:
        answer = prompter.ask(question).strip()
        if answer:
            return answer
        rprint("[red]This field cannot be empty. Please try again.[/red]")
