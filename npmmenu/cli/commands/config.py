"""Show the effective configuration."""
import typer
from rich.table import Table

from npmmenu.cli.state import get_state


def config_command(ctx: typer.Context):
    """Print the configuration npm-menu would use here."""
    state = get_state(ctx)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="white")
    table.add_column("Value", style="white")
    for key, value in state.service.config.as_dict().items():
        table.add_row(key, "" if value is None else str(value))

    state.console.print(table)
