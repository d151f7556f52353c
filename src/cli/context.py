"""CLI context and dependency container."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import click
import typer

from src.cli.deployment.config_store import ConfigStore
from src.cli.deployment.configurator import InteractiveConfigurator
from src.cli.deployment.container_deployer import ContainerDeployer
from src.cli.deployment.manifest import ManifestRenderer
from src.cli.deployment.service_registrar import ServiceRegistrar
from src.cli.deployment.shell_commands import ShellCommands
from src.cli.shared.compose import DEFAULT_COMPOSE_COMMAND, ComposeRunner
from src.cli.shared.console import CLIConsole, console
from src.infra.constants import DeploymentConstants, DeploymentPaths, default_config_dir
from src.utils.paths import find_project_root


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    constants: DeploymentConstants
    paths: DeploymentPaths
    commands: ShellCommands
    store: ConfigStore
    compose_command: tuple[str, ...]

    @property
    def is_configured(self) -> bool:
        return self.store.is_configured(self.paths.compose_file)

    def renderer(self) -> ManifestRenderer:
        return ManifestRenderer(self.paths, self.constants)

    def compose(self) -> ComposeRunner:
        return ComposeRunner(
            self.commands.runner,
            compose_file=self.paths.compose_file,
            compose_command=self.compose_command,
        )

    def configurator(self) -> InteractiveConfigurator:
        return InteractiveConfigurator(self.store, self.console, self.paths, self.renderer())

    def deployer(self) -> ContainerDeployer:
        return ContainerDeployer(
            self.console,
            self.paths,
            self.commands,
            self.compose(),
            self.store,
            configurator=self.configurator(),
            renderer=self.renderer(),
            constants=self.constants,
        )

    def registrar(self) -> ServiceRegistrar:
        return ServiceRegistrar(
            self.console,
            self.paths,
            self.commands.systemctl,
            self.store,
            constants=self.constants,
        )


def build_cli_context(
    config_dir: Path | None = None,
    project_dir: Path | None = None,
    compose_command: Sequence[str] = DEFAULT_COMPOSE_COMMAND,
) -> CLIContext:
    """Build a fresh CLIContext."""
    project_root = Path(project_dir) if project_dir else find_project_root()
    constants = DeploymentConstants()
    paths = DeploymentPaths(config_dir or default_config_dir(), project_root)

    return CLIContext(
        console=console,
        constants=constants,
        paths=paths,
        commands=ShellCommands(project_root),
        store=ConfigStore(paths.config_file),
        compose_command=tuple(compose_command),
    )


def get_cli_context(ctx: typer.Context | None = None) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj
    return build_cli_context()
