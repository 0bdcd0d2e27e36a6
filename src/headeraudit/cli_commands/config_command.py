"""Configuration CLI command."""

import typer
from rich.markup import escape
from rich.table import Table

from headeraudit.errors import ConfigError

from .deps import cli_module
from .shared import app, console, err_console


@app.command()
def config(
    action: str = typer.Argument("show", help="Action: show, path"),
) -> None:
    """Show the effective configuration and where each value comes from."""
    cli = cli_module()

    if action == "path":
        console.print(str(cli.global_config_path()))
        return

    if action != "show":
        err_console.print(f"[red]Unknown action: {escape(action)}. Use 'show' or 'path'.[/red]")
        raise typer.Exit(cli.EXIT_FATAL)

    try:
        settings = cli.load_settings()
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error: {escape(str(exc))}[/red]")
        raise typer.Exit(cli.EXIT_FATAL) from exc

    table = Table(title="headeraudit configuration")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_column("Source", style="dim")
    for name, key in cli.ENV_KEYS.items():
        value = getattr(settings, name)
        if isinstance(value, frozenset):
            value = ", ".join(sorted(value)) or "-"
        table.add_row(key, escape(str(value)), cli.get_config_source(key))
    console.print(table)
