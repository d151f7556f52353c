"""Interactive configuration pass.

Walks the operator through every configuration field, offering stored
values as defaults, then persists the result and renders the manifest.
"""

from __future__ import annotations

import secrets
import string
from typing import Protocol

from loguru import logger

from src.infra.constants import DEFAULT_CONSTANTS, DeploymentPaths

from .config_store import ConfigStore, DeploymentConfig
from .errors import MissingRequiredField
from .fields import CONFIG_FIELDS, DATA_DIR, SESSION_SECRET, ConfigField
from .manifest import ManifestRenderer

SECRET_ALPHABET = string.ascii_letters + string.digits


class PromptConsole(Protocol):
    def print_subheader(self, title: str) -> None: ...

    def prompt_input(self, label: str, default: str = "", *, secret: bool = False) -> str: ...

    def info(self, msg: str) -> None: ...

    def warn(self, msg: str) -> None: ...

    def ok(self, msg: str) -> None: ...

    def print(self, msg: str | None = None) -> None: ...


def generate_session_secret(length: int = DEFAULT_CONSTANTS.SESSION_SECRET_LENGTH) -> str:
    """Generate a random alphanumeric session secret."""
    return "".join(secrets.choice(SECRET_ALPHABET) for _ in range(length))


class InteractiveConfigurator:
    """Runs the full prompt pass and writes config plus manifest."""

    def __init__(
        self,
        store: ConfigStore,
        console: PromptConsole,
        paths: DeploymentPaths,
        renderer: ManifestRenderer,
    ) -> None:
        self.store = store
        self.console = console
        self.paths = paths
        self.renderer = renderer

    def _default_for(self, field: ConfigField, stored: DeploymentConfig | None) -> str:
        if stored is not None and stored.get(field.key):
            return stored.get(field.key)
        if field.key == DATA_DIR:
            return str(self.paths.default_data_dir)
        if field.key == SESSION_SECRET:
            return generate_session_secret()
        return field.default

    def prompt(self) -> DeploymentConfig:
        """Ask for every prompted field.

        Returns:
            The configuration entered by the operator (not yet saved)

        Raises:
            MissingRequiredField: As soon as the database DSN is left empty
        """
        stored = self.store.load() if self.store.exists() else None
        values: dict[str, str] = {}

        section = None
        for field in CONFIG_FIELDS:
            if not field.prompted:
                continue
            if field.section != section:
                section = field.section
                self.console.print_subheader(section)
            if field.hint:
                self.console.info(field.hint)

            default = self._default_for(field, stored)
            value = self.console.prompt_input(field.label, default, secret=field.secret)
            if field.required and not value:
                raise MissingRequiredField(
                    field.key, details=f"{field.label} cannot be empty."
                )
            values[field.key] = value

        return DeploymentConfig.from_mapping(values)

    def run(self) -> DeploymentConfig:
        """Prompt, save, render the manifest and create data directories.

        Returns:
            The saved configuration
        """
        if self.store.is_configured(self.paths.compose_file):
            self.console.warn(
                "An existing configuration was found; entering modify mode "
                "(press Enter to keep the current value)"
            )

        config = self.prompt()
        self.store.save(config, project_dir=self.paths.project_dir)
        config = self.store.load()
        self.renderer.write(config, self.paths.compose_file)

        for directory in (
            self.paths.host_data_dir(config.DATA_DIR),
            self.paths.host_logs_dir(config.DATA_DIR),
        ):
            directory.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Ensured directory {directory}")

        self.console.ok(f"Configuration saved to {self.store.path}")
        self.console.ok(f"Compose manifest written to {self.paths.compose_file}")
        return config
