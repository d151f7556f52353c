"""systemd registration for boot-time startup."""

from __future__ import annotations

import os
import re
import shutil
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from loguru import logger

from src.infra.constants import DEFAULT_CONSTANTS, DeploymentConstants, DeploymentPaths
from src.utils.console_like import ConsoleLike

from .config_store import ConfigStore
from .errors import DeploymentError, NotConfigured, PermissionDenied
from .shell_commands import CommandResult, SystemctlCommands

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
UNIT_TEMPLATE = "new-api-deploy.service.j2"

_BARE_WORD = re.compile(r"[\w@+=:,./-]+")


def systemd_escape_specifiers(value: object) -> str:
    """Double ``%`` so systemd does not expand it as a unit specifier."""
    return str(value).replace("%", "%%")


def systemd_quote(value: object) -> str:
    """Render one ``Exec*=`` argument, quoting it when it is not a bare word."""
    text = systemd_escape_specifiers(value).replace("$", "$$")
    if _BARE_WORD.fullmatch(text.replace("%%", "").replace("$$", "")):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def get_template_env() -> Environment:
    """Get Jinja2 environment for unit file rendering."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["systemd_quote"] = systemd_quote
    env.filters["systemd_path"] = systemd_escape_specifiers
    return env


def _is_root() -> bool:
    return os.geteuid() == 0


def resolve_compose_command(compose_command: Sequence[str]) -> list[str]:
    """Resolve the compose executable on PATH, keeping its arguments."""
    executable, *rest = compose_command
    return [shutil.which(executable) or executable, *rest]


class ServiceRegistrar:
    """Installs and removes the systemd unit that starts the stack at boot."""

    def __init__(
        self,
        console: ConsoleLike,
        paths: DeploymentPaths,
        systemctl: SystemctlCommands,
        store: ConfigStore,
        *,
        constants: DeploymentConstants | None = None,
        is_root: Callable[[], bool] = _is_root,
    ) -> None:
        self.console = console
        self.paths = paths
        self.systemctl = systemctl
        self.store = store
        self.constants = constants or DEFAULT_CONSTANTS
        self._is_root = is_root

    @property
    def unit_name(self) -> str:
        return self.constants.UNIT_NAME

    def _require_root(self, action: str) -> None:
        if not self._is_root():
            raise PermissionDenied(
                f"{action} requires root privileges",
                details="Re-run the command with sudo.",
            )

    def _checked(self, result: CommandResult, action: str) -> None:
        if not result.success:
            raise DeploymentError(
                f"systemctl failed to {action} (exit code {result.returncode})",
                details=result.stderr.strip() or None,
            )

    def render_unit(self, manifest_path: Path, compose_command: Sequence[str]) -> str:
        context: dict[str, Any] = {
            "working_directory": self.paths.config_dir,
            "compose": resolve_compose_command(compose_command),
            "manifest": manifest_path,
            "timeout_seconds": self.constants.UNIT_START_TIMEOUT_SECONDS,
        }
        return get_template_env().get_template(UNIT_TEMPLATE).render(**context)

    def install(self, manifest_path: Path, compose_command: Sequence[str]) -> Path:
        """Write, load and enable the unit.

        Args:
            manifest_path: Compose manifest the unit drives
            compose_command: Compose command prefix (plugin or standalone)

        Returns:
            Path to the installed unit file

        Raises:
            PermissionDenied: If not running as root; nothing is written
            NotConfigured: If the deployment has not been configured
            DeploymentError: If systemctl cannot reload or enable the unit
        """
        self._require_root("Installing the systemd service")
        if not self.store.is_configured(manifest_path):
            raise NotConfigured(
                "Configure the deployment before installing the service",
                details="Run the 'config' command first.",
            )

        self.console.step("Installing systemd service...")
        unit_file = self.paths.service_file
        unit_file.parent.mkdir(parents=True, exist_ok=True)
        unit_file.write_text(self.render_unit(manifest_path, compose_command))
        logger.info(f"Unit file written to {unit_file}")

        self._checked(self.systemctl.daemon_reload(), "reload the systemd configuration")
        self._checked(self.systemctl.enable(self.unit_name), f"enable '{self.unit_name}' at boot")

        self.console.ok(f"Service '{self.unit_name}' installed and enabled at boot")
        self.console.print("\nUseful commands:")
        for verb, what in (
            ("status", "show status"),
            ("restart", "restart the service"),
            ("stop", "stop the service"),
            ("disable", "disable start at boot"),
        ):
            self.console.print(f"  systemctl {verb} {self.unit_name}   # {what}")
        return unit_file

    def uninstall(self) -> None:
        """Stop, disable and remove the unit.

        Raises:
            PermissionDenied: If not running as root
            DeploymentError: If systemctl cannot reload its configuration
        """
        self._require_root("Removing the systemd service")
        self.console.step("Removing systemd service...")

        for result in (self.systemctl.stop(self.unit_name), self.systemctl.disable(self.unit_name)):
            if not result.success:
                logger.debug(f"Ignoring systemctl failure: {result.output}")

        self.paths.service_file.unlink(missing_ok=True)
        self._checked(self.systemctl.daemon_reload(), "reload the systemd configuration")
        self.console.ok(f"Service '{self.unit_name}' removed")
