"""Audit CLI command."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from headeraudit.errors import ConfigError

from .deps import cli_module
from .shared import app, configure_logging, err_console


def render_outcomes(cli, outcomes, output_format: str) -> str:
    """Render every successful report; JSON batches become one array."""
    reports = [outcome.report for outcome in outcomes if outcome.report is not None]
    if not reports:
        return ""
    if output_format == "json":
        if len(outcomes) == 1:
            return cli.render(reports[0], "json") + "\n"
        return cli.render_json_many(reports) + "\n"
    return "\n".join(cli.render(report, "human") for report in reports)


@app.command()
def audit(
    urls: list[str] = typer.Argument(..., help="Target URL(s), absolute http:// or https://"),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: json or human"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Deadline in seconds for the whole redirect chain"
    ),
    max_redirects: Optional[int] = typer.Option(
        None, "--max-redirects", help="Maximum number of redirects to follow"
    ),
    max_body_size: Optional[int] = typer.Option(
        None, "--max-body-size", help="Bytes of response body to inspect"
    ),
    non_session_cookie: Optional[list[str]] = typer.Option(
        None,
        "--non-session-cookie",
        "-c",
        help="Cookie name exempt from the HttpOnly requirement (repeatable)",
    ),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", help="Maximum number of targets audited at once"
    ),
    insecure: bool = typer.Option(
        False, "--insecure", help="Skip TLS certificate verification"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the report to a file instead of stdout"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose audit output"),
) -> None:
    """Audit the security headers of one or more URLs.

    Exit status is 0 when no finding has severity fail, 1 when one does and
    2 when a target could not be fetched.
    """
    cli = cli_module()
    configure_logging(verbose)

    try:
        settings = cli.load_settings(
            timeout=timeout,
            max_redirects=max_redirects,
            max_body_bytes=max_body_size,
            output_format=output_format,
            non_session_cookies=non_session_cookie or None,
            concurrency=concurrency,
            verify_tls=False if insecure else None,
        )
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error: {escape(str(exc))}[/red]")
        raise typer.Exit(cli.EXIT_FATAL) from exc

    progress = None
    if verbose:
        progress = lambda msg: err_console.print(f"[dim]{escape(msg)}[/dim]")  # noqa: E731

    outcomes = cli.safe_async_run(cli.audit_many(urls, settings, progress=progress))

    for outcome in outcomes:
        if outcome.error is not None:
            err_console.print(f"[red]Audit failed: {escape(str(outcome.error))}[/red]")

    text = render_outcomes(cli, outcomes, settings.output_format)
    if output is not None:
        if text:
            output.write_text(text, encoding="utf-8")
            err_console.print(f"[green]Report written to[/green] {escape(str(output))}")
    elif text:
        typer.echo(text, nl=False)

    raise typer.Exit(cli.overall_exit_code(outcomes))
