"""Operator-facing terminal output and prompts.

Everything the operator reads or types goes through CLIConsole, a thin
wrapper around a rich Console. Diagnostic traces go to loguru instead.
"""

from collections.abc import Callable
from functools import wraps

import typer
from rich.console import Console, ConsoleRenderable
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status

SECRET_PLACEHOLDER = "configured"


class CLIConsole:
    """Rich console wrapper with tagged message helpers and prompts."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        if msg is None:
            self.console.print()
        else:
            self.console.print(msg)

    def status(self, status: str) -> Status:
        return self.console.status(status)

    def info(self, msg: str) -> None:
        self.console.print(f"[green]\\[INFO][/green] {msg}")

    def step(self, msg: str) -> None:
        self.console.print(f"[cyan]\\[STEP][/cyan] {msg}")

    def ok(self, msg: str) -> None:
        self.console.print(f"[green]✅[/green] {msg}")

    def warn(self, msg: str) -> None:
        self.console.print(f"[yellow]\\[WARN][/yellow] {msg}")

    def error(self, msg: str) -> None:
        self.console.print(f"[red]\\[ERROR][/red] {msg}")

    def prompt_input(self, label: str, default: str = "", *, secret: bool = False) -> str:
        """Ask for a value, returning ``default`` when the answer is empty.

        Args:
            label: Prompt text
            default: Current value offered as the default
            secret: Mask the default instead of echoing it

        Returns:
            The entered value (surrounding whitespace removed) or the default
        """
        shown = SECRET_PLACEHOLDER if secret and default else default
        suffix = f" \\[{escape(shown)}]: " if shown else ": "
        try:
            response = self.console.input(f"[blue]{escape(label)}[/blue]{suffix}")
        except EOFError:
            response = ""
        return response.strip() or default

    def pause(self, message: str = "Press Enter to continue...") -> None:
        try:
            self.console.input(f"[yellow]{message}[/yellow]")
        except EOFError:
            self.console.print()

    def show_error(self, message: str, details: str | None = None) -> None:
        """Print an error line, plus a details panel when there is more to say."""
        self.console.print(f"\n[bold red]❌ {escape(message)}[/bold red]\n")
        if details:
            self.console.print(Panel(escape(details), title="Details", border_style="red"))

    def handle_error(self, message: str, details: str | None = None, exit_code: int = 1) -> None:
        """Report an error and end the command with ``exit_code``."""
        self.show_error(message, details)
        raise typer.Exit(exit_code)

    def print_header(self, title: str, style: str = "blue") -> None:
        self.console.print(Panel.fit(f"[bold {style}]{title}[/bold {style}]", border_style=style))

    def print_subheader(self, title: str) -> None:
        self.console.print(f"\n[bold cyan]==================== {title} ====================[/bold cyan]")


def with_error_handling(func: Callable[..., None]) -> Callable[..., None]:
    """Turn deployment failures into a readable report and an exit status.

    DeploymentError (and subclasses) exit with status 1; Ctrl-C exits
    with 130.
    """
    from src.cli.deployment.errors import DeploymentError

    @wraps(func)
    def wrapper(*args: object, **kwargs: object) -> None:
        try:
            func(*args, **kwargs)
        except DeploymentError as e:
            console.handle_error(e.message, e.details)
        except KeyboardInterrupt:
            console.print("\n[dim]Operation cancelled by user.[/dim]")
            raise typer.Exit(130) from None

    return wrapper


console = CLIConsole()
