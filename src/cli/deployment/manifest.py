"""Compose manifest rendering.

The manifest is built as a structured model and serialized once with
PyYAML, so configuration values are always emitted as properly quoted YAML
scalars and never spliced into template text.

Rendering is deterministic: the same configuration always yields the same
YAML body. Only the comment header carries the generation timestamp.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from loguru import logger

from src.infra.constants import DEFAULT_CONSTANTS, DeploymentConstants, DeploymentPaths

from .config_store import DeploymentConfig
from .fields import ENVIRONMENT_KEYS

DEFAULT_PORT = "3000"
CLI_NAME = "newapi-deploy"


def escape_interpolation(value: str) -> str:
    """Escape `$` so compose passes the value through without substitution."""
    return value.replace("$", "$$")


@dataclass(frozen=True)
class HealthCheck:
    """Container health probe."""

    test: tuple[str, ...]
    interval: str
    timeout: str
    retries: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "test": [escape_interpolation(part) for part in self.test],
            "interval": self.interval,
            "timeout": self.timeout,
            "retries": self.retries,
        }


@dataclass(frozen=True)
class ServiceDefinition:
    """A single compose service block.

    Attributes:
        name: Compose service name
        image: Image reference
        container_name: Fixed container name
        restart: Restart policy
        network_mode: Network mode
        command: Arguments passed to the image entrypoint
        volumes: ``host:container`` bind mounts
        environment: Ordered (key, value) pairs; never contains empty values
        healthcheck: Health probe

    Values are held unescaped; ``to_dict`` doubles every ``$`` so compose
    does not interpolate them.
    """

    name: str
    image: str
    container_name: str
    restart: str
    network_mode: str
    command: str
    volumes: tuple[str, ...]
    environment: tuple[tuple[str, str], ...]
    healthcheck: HealthCheck

    def to_dict(self) -> dict[str, Any]:
        return {
            "image": self.image,
            "container_name": self.container_name,
            "restart": self.restart,
            "network_mode": self.network_mode,
            "command": self.command,
            "volumes": [escape_interpolation(volume) for volume in self.volumes],
            "environment": [
                f"{key}={escape_interpolation(value)}" for key, value in self.environment
            ],
            "healthcheck": self.healthcheck.to_dict(),
        }


@dataclass(frozen=True)
class OrchestrationManifest:
    """Rendered compose descriptor for the deployment."""

    service: ServiceDefinition
    generated_at: datetime = field(compare=False)

    @property
    def environment(self) -> dict[str, str]:
        return dict(self.service.environment)

    def header(self) -> str:
        timestamp = self.generated_at.strftime("%Y-%m-%d %H:%M:%S")
        return (
            "# New API Docker Compose deployment\n"
            "# Generated automatically, do not edit by hand\n"
            f"# Generated at: {timestamp}\n"
            f"# To change the configuration run: {CLI_NAME} config\n"
        )

    def body(self) -> str:
        """Serialize the service definition (timestamp-free)."""
        document = {"services": {self.service.name: self.service.to_dict()}}
        text: str = yaml.safe_dump(
            document,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
            width=4096,
        )
        return text

    def to_yaml(self) -> str:
        return f"{self.header()}\n{self.body()}"


class ManifestRenderer:
    """Renders a DeploymentConfig into an OrchestrationManifest.

    The renderer never reads the configuration file itself; it only sees
    the snapshot it is given.
    """

    def __init__(
        self, paths: DeploymentPaths, constants: DeploymentConstants | None = None
    ) -> None:
        """Initialize the renderer.

        Args:
            paths: Deployment path resolver (for the default data directory)
            constants: Optional deployment constants (uses defaults if not provided)
        """
        self.paths = paths
        self.constants = constants or DEFAULT_CONSTANTS

    def render(
        self, config: DeploymentConfig, generated_at: datetime | None = None
    ) -> OrchestrationManifest:
        """Render the manifest for a configuration.

        Args:
            config: Configuration snapshot
            generated_at: Timestamp for the header (defaults to now)

        Returns:
            The structured manifest
        """
        c = self.constants
        data_dir = self.paths.host_data_dir(config.DATA_DIR)
        logs_dir = self.paths.host_logs_dir(config.DATA_DIR)

        # Empty values are dropped, not emitted as KEY=
        environment = tuple(
            (key, config.get(key)) for key in ENVIRONMENT_KEYS if config.get(key)
        )

        port = config.PORT or DEFAULT_PORT
        probe = (
            f"wget -q -O - http://localhost:{port}{c.HEALTH_STATUS_PATH} "
            "| grep -o '\"success\":.*true' || exit 1"
        )

        service = ServiceDefinition(
            name=c.COMPOSE_SERVICE_NAME,
            image=c.IMAGE_TAG,
            container_name=c.CONTAINER_NAME,
            restart="always",
            network_mode="host",
            command=f"--log-dir {c.CONTAINER_LOGS_DIR}",
            volumes=(
                f"{data_dir}:{c.CONTAINER_DATA_DIR}",
                f"{logs_dir}:{c.CONTAINER_LOGS_DIR}",
            ),
            environment=environment,
            healthcheck=HealthCheck(
                test=("CMD-SHELL", probe),
                interval=c.HEALTH_INTERVAL,
                timeout=c.HEALTH_TIMEOUT,
                retries=c.HEALTH_RETRIES,
            ),
        )
        return OrchestrationManifest(
            service=service, generated_at=generated_at or datetime.now()
        )

    def write(self, config: DeploymentConfig, path: Path | None = None) -> Path:
        """Render a configuration and replace the manifest file with it.

        Args:
            config: Configuration snapshot
            path: Destination (defaults to the deployment compose file)

        Returns:
            Path to the written manifest
        """
        target = Path(path or self.paths.compose_file)
        target.parent.mkdir(parents=True, exist_ok=True)
        content = self.render(config).to_yaml()

        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, target)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

        logger.info(f"Compose manifest written to {target}")
        return target
