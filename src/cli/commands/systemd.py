"""Boot-time registration commands (require root)."""

import typer

from src.cli.context import get_cli_context
from src.cli.shared.console import with_error_handling


@with_error_handling
def install_service(ctx: typer.Context) -> None:
    """Install and enable the systemd unit."""
    cli_ctx = get_cli_context(ctx)
    cli_ctx.registrar().install(cli_ctx.paths.compose_file, cli_ctx.compose_command)


@with_error_handling
def remove_service(ctx: typer.Context) -> None:
    """Stop, disable and remove the systemd unit."""
    get_cli_context(ctx).registrar().uninstall()
