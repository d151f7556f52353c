"""Configuration and deployment commands.

This module provides the commands that change what is running: the
configuration wizard, the full deploy and the quick update.
"""

import typer

from src.cli.context import get_cli_context
from src.cli.deployment.container_deployer import DeploymentState
from src.cli.shared.console import CLIConsole, with_error_handling


def _print_summary(console: CLIConsole, state: DeploymentState) -> None:
    revision = (
        f"{state.old_revision} -> {state.new_revision}"
        if state.code_changed
        else state.new_revision
    )
    console.info(f"Branch: {state.branch}  Revision: {revision}")
    if state.new_image_id:
        console.info(f"Image: {state.new_image_id}")


@with_error_handling
def config(ctx: typer.Context) -> None:
    """Create or modify the deployment configuration."""
    cli_ctx = get_cli_context(ctx)
    cli_ctx.console.print_header("New API deployment configuration")
    cli_ctx.configurator().run()


@with_error_handling
def deploy(ctx: typer.Context) -> None:
    """Pull the latest code, rebuild the image and redeploy."""
    cli_ctx = get_cli_context(ctx)
    cli_ctx.console.print_header("Deploying New API")
    state = cli_ctx.deployer().deploy()
    _print_summary(cli_ctx.console, state)


@with_error_handling
def update(ctx: typer.Context) -> None:
    """Quick update with the stored configuration (no prompts)."""
    cli_ctx = get_cli_context(ctx)
    cli_ctx.console.print_header("Updating New API")
    state = cli_ctx.deployer().update()
    _print_summary(cli_ctx.console, state)
