"""
Main CLI application for npm-menu.

Defines the Typer application structure and command routing with a thin CLI
layer. Running ``npm-menu`` without a subcommand opens the interactive menu.
"""
import logging
from typing import Optional

import typer

from npmmenu.cli.commands.config import config_command
from npmmenu.cli.commands.install import (
    install_all_command,
    install_command,
    uninstall_command,
    update_command,
)
from npmmenu.cli.commands.project import clean_command, edit_command, init_command, list_command
from npmmenu.cli.commands.run import run_command, test_command
from npmmenu.cli.state import CliState, action_errors
from npmmenu.core.actions import ActionService
from npmmenu.core.config_manager import ConfigManager
from npmmenu.rich_utils.ui_helpers import choose, get_console


# Initialize Typer app
app = typer.Typer(help="npm-menu - menu-driven front end for npm")

# Register commands
app.command("install", help="Install one or more dependencies.")(install_command)
app.command("install-all", help="Install every dependency declared in package.json.")(install_all_command)
app.command("uninstall", help="Uninstall a dependency.")(uninstall_command)
app.command("update", help="Update dependencies.")(update_command)
app.command("list", help="List installed dependencies.")(list_command)
app.command("clean", help="Delete node_modules and the lock file.")(clean_command)
app.command("init", help="Create a package.json.")(init_command)
app.command("run", help="Run a package.json script.")(run_command)
app.command("test", help="Run the test script.")(test_command)
app.command("edit", help="Open package.json in $EDITOR.")(edit_command)
app.command("config", help="Show the effective configuration.")(config_command)

# Menu entries: label, command, arguments for ctx.invoke
MENU = [
    ("Install dependency", install_command, {"names": None, "destination": None}),
    ("Install all dependencies", install_all_command, {}),
    ("Uninstall dependency", uninstall_command, {"name": None}),
    ("Update dependencies", update_command, {"name": None}),
    ("List dependencies", list_command, {"sort": "name", "reverse": False}),
    ("Run script", run_command, {"script": None, "args": None}),
    ("Run tests", test_command, {"args": None}),
    ("Clean project", clean_command, {"yes": False}),
    ("Init project", init_command, {"yes": False}),
    ("Edit package.json", edit_command, {}),
    ("Show configuration", config_command, {}),
]


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="Path to config YAML"),
    global_args: Optional[str] = typer.Option(None, "--global-args", help="Arguments placed before the npm verb"),
    verb_args: Optional[str] = typer.Option(None, "--verb-args", help="Arguments placed after the npm verb"),
    raw_args: Optional[bool] = typer.Option(
        None, "--raw-args/--no-raw-args", help="Pass the free-form arguments through the shell unchanged"
    ),
    detach: bool = typer.Option(False, "--detach", help="Do not wait; write output to a log file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
):
    """npm-menu - menu-driven front end for npm.

    Run 'npm-menu' for the interactive menu or 'npm-menu COMMAND --help'.
    """
    configure_logging(verbose)
    console = get_console()

    with action_errors(console):
        try:
            config = ConfigManager().build_command_config(
                config_path,
                global_args=global_args,
                verb_args=verb_args,
                raw_args=raw_args,
            )
        except FileNotFoundError as e:
            console.print(f"❌ {e}", style="bold red", markup=False)
            raise typer.Exit(1)

    ctx.obj = CliState(console=console, service=ActionService(config, detach=detach))

    if ctx.invoked_subcommand is None:
        # Default to the interactive menu when no subcommand is specified
        entry = choose(console, "npm", MENU, label=lambda item: item[0])
        if entry is not None:
            _, command, kwargs = entry
            ctx.invoke(command, ctx, **kwargs)
