"""Main CLI application module.

This module provides the main entry point for the New API deployment CLI.
Every operation is a top-level command; running without a command opens
the interactive menu.

Commands:
- config: Create or modify the deployment configuration
- deploy / update: Full deploy or quick update
- status / logs / restart / stop: Service control
- install-service / remove-service: systemd boot-time registration
- help: Usage overview
"""

import dataclasses
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import click
import typer
from typer.core import TyperGroup

from src.cli.context import build_cli_context, get_cli_context
from src.cli.deployment.dependencies import check_dependencies
from src.cli.shared.console import with_error_handling
from src.utils.logging import configure_logging

from .commands import (
    config,
    deploy,
    install_service,
    logs,
    remove_service,
    restart,
    run_menu,
    show_help,
    status,
    stop,
    update,
)

HELP_COMMAND = "help"


class DeployCommandGroup(TyperGroup):
    """Command group reporting unknown commands with exit status 1."""

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


# Create the main CLI application
app = typer.Typer(
    cls=DeployCommandGroup,
    help="New API single-host deployment tool",
    no_args_is_help=False,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
@with_error_handling
def main_callback(
    ctx: typer.Context,
    config_dir: Annotated[
        Path | None,
        typer.Option(
            "--config-dir",
            envvar="NEWAPI_DEPLOY_HOME",
            help="Configuration directory (default: ~/.new-api-deploy)",
        ),
    ] = None,
    project_dir: Annotated[
        Path | None,
        typer.Option(
            "--project-dir",
            envvar="NEWAPI_PROJECT_DIR",
            help="Source checkout to deploy (default: enclosing git repository)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show diagnostic logging"),
    ] = False,
) -> None:
    configure_logging(verbose)

    cli_ctx = build_cli_context(config_dir, project_dir)
    if ctx.invoked_subcommand != HELP_COMMAND:
        compose_command = check_dependencies(cli_ctx.commands.runner)
        cli_ctx = dataclasses.replace(cli_ctx, compose_command=compose_command)
    cli_ctx.paths.ensure_config_dir()
    ctx.obj = cli_ctx

    if ctx.invoked_subcommand is None:
        run_menu(cli_ctx)


@app.command(HELP_COMMAND)
def help_command(ctx: typer.Context) -> None:
    """Show usage and examples."""
    show_help(get_cli_context(ctx))


def _register(name: str, func: Callable[..., None]) -> None:
    app.command(name)(func)


_register("config", config)
_register("deploy", deploy)
_register("update", update)
_register("status", status)
_register("logs", logs)
_register("restart", restart)
_register("stop", stop)
_register("install-service", install_service)
_register("remove-service", remove_service)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
