"""headeraudit CLI - security header audit tool."""

from headeraudit.cli_commands.shared import app, console, err_console
from headeraudit.config import (
    ENV_KEYS,
    get_config_source,
    global_config_path,
    load_settings,
)
from headeraudit.modules.audit import (
    EXIT_FATAL,
    audit_many,
    audit_url,
    overall_exit_code,
)
from headeraudit.modules.report import render, render_json_many
from headeraudit.modules.rules import CATALOG
from headeraudit.utils.async_utils import safe_async_run

# Registers commands on ``app``.
from headeraudit.cli_commands import audit_command, checks_command, config_command  # noqa: F401


@app.command()
def version() -> None:
    """Show the installed headeraudit version."""
    from headeraudit import __version__

    console.print(f"headeraudit {__version__}")


def main() -> None:
    app()


__all__ = [
    "CATALOG",
    "ENV_KEYS",
    "EXIT_FATAL",
    "app",
    "audit_many",
    "audit_url",
    "console",
    "err_console",
    "get_config_source",
    "global_config_path",
    "load_settings",
    "main",
    "overall_exit_code",
    "render",
    "render_json_many",
    "safe_async_run",
]


if __name__ == "__main__":
    main()
