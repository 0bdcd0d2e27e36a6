"""List the check catalog."""

from rich.table import Table

from .deps import cli_module
from .shared import app, console


@app.command()
def checks() -> None:
    """List every check the audit runs, in report order."""
    cli = cli_module()
    table = Table(title="Security checks")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Checks")
    for check in cli.CATALOG:
        table.add_row(check.id, check.title)
    console.print(table)
