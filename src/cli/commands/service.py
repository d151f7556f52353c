"""Service control commands: status, logs, restart and stop."""

from typing import Annotated

import typer

from src.cli.context import get_cli_context
from src.cli.shared.console import with_error_handling
from src.infra.constants import DEFAULT_CONSTANTS


@with_error_handling
def status(ctx: typer.Context) -> None:
    """Show the service container status."""
    get_cli_context(ctx).deployer().show_status()


@with_error_handling
def logs(
    ctx: typer.Context,
    lines: Annotated[
        int,
        typer.Argument(min=1, help="Number of trailing log lines to show"),
    ] = DEFAULT_CONSTANTS.DEFAULT_LOG_LINES,
    follow: Annotated[
        bool,
        typer.Option("--follow/--no-follow", help="Keep streaming new log lines"),
    ] = True,
) -> None:
    """Show the service logs (Ctrl-C stops following)."""
    get_cli_context(ctx).deployer().show_logs(lines, follow=follow)


@with_error_handling
def restart(ctx: typer.Context) -> None:
    """Restart the service container."""
    get_cli_context(ctx).deployer().restart()


@with_error_handling
def stop(ctx: typer.Context) -> None:
    """Stop and remove the service container."""
    get_cli_context(ctx).deployer().teardown()
