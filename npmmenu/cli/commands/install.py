"""
Dependency install, uninstall and update commands.

Thin wrappers around ActionService that prompt for whatever was not given
on the command line.
"""
from typing import List, Optional

import typer

from npmmenu.cli.state import action_errors, get_state, show_process
from npmmenu.models import InstallDestination
from npmmenu.rich_utils.ui_helpers import ask_choice, ask_text, choose

DESTINATIONS = [destination.value for destination in InstallDestination]


def install_command(
    ctx: typer.Context,
    names: Optional[List[str]] = typer.Argument(None, help="Packages to install"),
    destination: Optional[str] = typer.Option(
        None, "-d", "--destination", help=f"Install destination: {', '.join(DESTINATIONS)}"
    ),
):
    """Install one or more dependencies."""
    state = get_state(ctx)
    console = state.console

    with action_errors(console):
        # Precondition before prompting
        state.service.manifest_path()

        if not names:
            name = (ask_text(console, "Dependency to install") or "").strip()
            if not name:
                console.print("Nothing to install.", style="yellow")
                return
            names = [name]
            if destination is None:
                destination = ask_choice(
                    console,
                    "Install destination",
                    DESTINATIONS,
                    default=state.service.config.install_destination.value,
                )

        handle = state.service.install_dependency(names, destination)

    show_process(console, handle)


def install_all_command(ctx: typer.Context):
    """Install every dependency declared in package.json."""
    state = get_state(ctx)
    with action_errors(state.console):
        handle = state.service.install_all()
    show_process(state.console, handle)


def uninstall_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Package to uninstall"),
):
    """Uninstall a dependency, chosen from package.json when not given."""
    state = get_state(ctx)
    console = state.console

    with action_errors(console):
        if name is None:
            entries = state.service.dependency_entries()
            if not entries:
                console.print("No dependencies declared in package.json.", style="yellow")
                return
            entry = choose(console, "Dependencies", entries, label=lambda e: e.label)
            if entry is None:
                return
            name = entry.name

        handle = state.service.uninstall_dependency(name)

    show_process(console, handle)


def update_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Package to update; all when omitted"),
):
    """Update dependencies to the newest versions their ranges allow."""
    state = get_state(ctx)
    with action_errors(state.console):
        handle = state.service.update(name)
    show_process(state.console, handle)
