import os
import sys
from typing import Callable, List, Optional, Sequence, TypeVar

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

T = TypeVar("T")


def is_ci_environment():
    return (
        os.getenv('CI') is not None or
        os.getenv('GITHUB_ACTIONS') is not None or
        not sys.stdout.isatty()
    )


def get_console() -> Console:
    """Detect environment and create console."""
    if is_ci_environment():
        # CI/automated environment - no colors, no interactive elements
        return Console(force_terminal=False, no_color=True)
    # Interactive terminal - full Rich capabilities
    return Console()


def print_buffer_header(console: Console, name: str) -> None:
    """Open a display surface for one command's output."""
    console.print(Rule(Text(name), style="bold blue"))


def filter_options(options: Sequence[T], text: str, label: Callable[[T], str] = str) -> List[T]:
    """Options whose label contains ``text``, case-insensitively."""
    needle = text.lower()
    return [option for option in options if needle in label(option).lower()]


def choose(
    console: Console,
    title: str,
    options: Sequence[T],
    label: Callable[[T], str] = str,
) -> Optional[T]:
    """Let the user pick one option from a searchable list.

    The answer may be the option number, its exact label, or a substring that
    narrows the list. An empty answer cancels and returns None.
    """
    candidates = list(options)
    while candidates:
        table = Table(title=title, show_header=False, box=None)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Option", style="white")
        for index, option in enumerate(candidates, start=1):
            table.add_row(str(index), label(option))
        console.print(table)

        answer = Prompt.ask("Select (number, name or filter)", console=console, default="").strip()
        if not answer:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(candidates):
            return candidates[int(answer) - 1]

        exact = [option for option in candidates if label(option) == answer]
        if exact:
            return exact[0]

        narrowed = filter_options(candidates, answer, label)
        if len(narrowed) == 1:
            return narrowed[0]
        if not narrowed:
            console.print(f"No match for '{answer}'", style="yellow")
            candidates = list(options)
        else:
            candidates = narrowed
    return None


def ask_text(console: Console, question: str, default: Optional[str] = None) -> str:
    return Prompt.ask(question, console=console, default=default)


def ask_choice(console: Console, question: str, choices: Sequence[str], default: Optional[str] = None) -> str:
    return Prompt.ask(question, console=console, choices=list(choices), default=default)


def confirm(console: Console, question: str, default: bool = False) -> bool:
    return Confirm.ask(question, console=console, default=default)
