"""Shared CLI app objects and logging setup."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="headeraudit",
    help="Audit a web application's security headers, cookies and redirects",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich; DEBUG for our own modules when verbose."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )
    logging.getLogger("headeraudit").setLevel(logging.DEBUG if verbose else logging.WARNING)
