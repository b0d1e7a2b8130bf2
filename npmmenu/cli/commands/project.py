"""
Project-level commands: list, clean, init, edit.
"""
import click
import typer

from npmmenu.cli.state import action_errors, get_state, show_process
from npmmenu.ecosystems.npm.listing import SORT_KEYS, render_table, sort_rows
from npmmenu.rich_utils.ui_helpers import confirm


def list_command(
    ctx: typer.Context,
    sort: str = typer.Option("name", "--sort", help=f"Sort column: {', '.join(SORT_KEYS)}"),
    reverse: bool = typer.Option(False, "--reverse", help="Reverse the sort order"),
):
    """List installed dependencies in a table."""
    state = get_state(ctx)
    console = state.console

    with action_errors(console):
        manifest = state.service.manifest()
        rows = sort_rows(state.service.list_dependencies(), key=sort, reverse=reverse)

    if not rows:
        console.print("No dependencies installed.", style="yellow")
        return
    console.print(render_table(rows, title=f"📦 {manifest.display_name} dependencies"))


def clean_command(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "-y", "--yes", help="Delete without asking"),
):
    """Delete node_modules and the lock file, asking for each."""
    state = get_state(ctx)
    console = state.console

    with action_errors(console):
        targets = state.service.clean_targets()
        if not targets:
            console.print("Nothing to clean.", style="yellow")
            return
        removed = state.service.clean_project(
            lambda path: yes or confirm(console, f"Delete {path}?")
        )

    for path in removed:
        console.print(f"🗑️  Removed {path}", markup=False)


def init_command(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "-y", "--yes", help="Accept npm's defaults without questions"),
):
    """Create a package.json in the current directory."""
    state = get_state(ctx)
    with action_errors(state.console):
        handle = state.service.init_project(yes)
    show_process(state.console, handle)


def edit_command(ctx: typer.Context):
    """Open package.json in $EDITOR."""
    state = get_state(ctx)
    with action_errors(state.console):
        path = state.service.manifest_path()
    click.edit(filename=str(path))
