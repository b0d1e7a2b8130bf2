"""
Shared CLI state and output helpers.

Keeps the typer commands thin: they read the ActionService from the context,
call one action and hand the resulting process to ``show_process``.
"""
import sys
from contextlib import contextmanager
from dataclasses import dataclass

import typer
from rich.console import Console

from npmmenu.core.actions import ActionService
from npmmenu.ecosystems.npm.runner import ProcessHandle
from npmmenu.rich_utils.ui_helpers import print_buffer_header
from npmmenu.utils.exceptions import NpmMenuError


@dataclass
class CliState:
    """Objects built once by the application callback."""
    console: Console
    service: ActionService


def get_state(ctx: typer.Context) -> CliState:
    return ctx.find_object(CliState)


@contextmanager
def action_errors(console: Console):
    """Print npm-menu errors and exit with status 1."""
    try:
        yield
    except NpmMenuError as e:
        console.print(f"❌ {e}", style="bold red", markup=False)
        sys.exit(1)


def show_process(console: Console, handle: ProcessHandle) -> None:
    """Display a launched process and exit with its status.

    Detached processes are only announced; their output goes to the log file.
    """
    if handle.log_path is not None:
        console.print(f"🚀 Started {handle.command} (pid {handle.pid})", style="bold blue", markup=False)
        console.print(f"   Output: {handle.log_path}", markup=False)
        return

    print_buffer_header(console, handle.buffer_name)
    handle.stream(lambda line: console.print(line, markup=False, highlight=False))
    status = handle.wait()

    style = "green" if status == 0 else "red"
    console.print(f"Process finished with exit code {status}", style=style)
    if status != 0:
        sys.exit(status)
