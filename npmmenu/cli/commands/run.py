"""Script commands: run a package.json script or the test script."""
from typing import List, Optional

import typer

from npmmenu.cli.state import action_errors, get_state, show_process
from npmmenu.rich_utils.ui_helpers import choose


def run_command(
    ctx: typer.Context,
    script: Optional[str] = typer.Argument(None, help="Script name; chosen from package.json when omitted"),
    args: Optional[List[str]] = typer.Argument(None, help="Arguments passed to the script after '--'"),
):
    """Run a script from package.json."""
    state = get_state(ctx)
    console = state.console

    with action_errors(console):
        if script is None:
            entries = state.service.script_entries()
            if not entries:
                console.print("No scripts declared in package.json.", style="yellow")
                return
            entry = choose(console, "Scripts", entries, label=lambda e: e.label)
            if entry is None:
                return
            script = entry.name

        handle = state.service.run_script(script, args or [])

    show_process(console, handle)


def test_command(
    ctx: typer.Context,
    args: Optional[List[str]] = typer.Argument(None, help="Arguments passed to the test script after '--'"),
):
    """Run the project's test script."""
    state = get_state(ctx)
    with action_errors(state.console):
        handle = state.service.test(args or [])
    show_process(state.console, handle)
