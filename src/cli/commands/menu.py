"""Interactive menu and help text.

Running the CLI without a subcommand opens a numbered menu offering the same
operations as the subcommands. Operation failures are reported and the menu
keeps running; only 0 (or end of input) leaves it.
"""

from __future__ import annotations

from collections.abc import Callable

from rich.panel import Panel

from src.cli.context import CLIContext
from src.cli.deployment.errors import DeploymentError
from src.infra.constants import DEFAULT_CONSTANTS

CLI_NAME = "newapi-deploy"

MENU_ITEMS: tuple[tuple[str, str], ...] = (
    ("1", "Configure / modify configuration"),
    ("2", "Deploy / update (pull code and redeploy)"),
    ("3", "Quick update (code and image only)"),
    ("4", "Show service status"),
    ("5", "Show logs"),
    ("6", "Restart service"),
    ("7", "Stop service"),
    ("8", "Install boot-time service (sudo)"),
    ("9", "Remove boot-time service (sudo)"),
    ("0", "Exit"),
)

HELP_COMMANDS: tuple[tuple[str, str], ...] = (
    ("(no command)", "Interactive menu"),
    ("config", "Create or modify the configuration"),
    ("deploy", "Deploy / update the service"),
    ("update", "Quick update"),
    ("status", "Show service status"),
    ("logs [lines]", f"Show logs (default {DEFAULT_CONSTANTS.DEFAULT_LOG_LINES} lines)"),
    ("restart", "Restart the service"),
    ("stop", "Stop the service"),
    ("install-service", "Install boot-time service (sudo)"),
    ("remove-service", "Remove boot-time service (sudo)"),
    ("help", "Show this help"),
)


def menu_actions(cli_ctx: CLIContext) -> dict[str, Callable[[], object]]:
    """Map menu choices to operations."""

    def deployer_call(name: str) -> Callable[[], object]:
        return lambda: getattr(cli_ctx.deployer(), name)()

    return {
        "1": lambda: cli_ctx.configurator().run(),
        "2": deployer_call("deploy"),
        "3": deployer_call("update"),
        "4": deployer_call("show_status"),
        "5": deployer_call("show_logs"),
        "6": deployer_call("restart"),
        "7": deployer_call("teardown"),
        "8": lambda: cli_ctx.registrar().install(
            cli_ctx.paths.compose_file, cli_ctx.compose_command
        ),
        "9": lambda: cli_ctx.registrar().uninstall(),
    }


def show_menu(cli_ctx: CLIContext) -> None:
    body = "\n".join(f"  {key}. {label}" for key, label in MENU_ITEMS)
    cli_ctx.console.print(
        Panel(body, title="New API interactive deployment", border_style="cyan", expand=False)
    )
    if cli_ctx.is_configured:
        cli_ctx.console.print(
            f"[green]\\[configured][/green] Config file: {cli_ctx.paths.config_file}"
        )
    else:
        cli_ctx.console.print("[yellow]\\[not configured][/yellow] Run option 1 first")


def run_menu(cli_ctx: CLIContext) -> None:
    """Run the interactive menu until the operator exits."""
    console = cli_ctx.console
    actions = menu_actions(cli_ctx)

    while True:
        show_menu(cli_ctx)
        try:
            choice = console.console.input("[blue]Select an option [0-9]: [/blue]").strip()
        except EOFError:
            choice = "0"

        if choice == "0":
            console.print("Bye!")
            return

        action = actions.get(choice)
        if action is None:
            console.warn("Invalid choice, please try again")
        else:
            try:
                action()
            except DeploymentError as e:
                console.show_error(e.message, e.details)

        console.print()
        console.pause()


def show_help(cli_ctx: CLIContext) -> None:
    console = cli_ctx.console
    console.print(f"Usage: {CLI_NAME} [OPTIONS] [COMMAND]\n")
    console.print("Commands:")
    for command, description in HELP_COMMANDS:
        console.print(f"  {command:<18}{description}")
    console.print(
        "\nOptions:\n"
        "  --config-dir PATH   Configuration directory (env NEWAPI_DEPLOY_HOME)\n"
        "  --project-dir PATH  Source checkout to deploy (env NEWAPI_PROJECT_DIR)\n"
        "  --verbose           Show diagnostic logging"
    )
    console.print(
        "\nExamples:\n"
        f"  {CLI_NAME}                       # interactive menu\n"
        f"  {CLI_NAME} deploy                # deploy directly\n"
        f"  {CLI_NAME} logs 200              # last 200 log lines\n"
        f"  sudo {CLI_NAME} install-service  # start at boot"
    )
