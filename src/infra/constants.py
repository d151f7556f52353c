"""Deployment constants and configuration.

This module centralizes all magic strings, paths, and configuration values
used throughout the deployment process.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DeploymentConstants:
    """Constants for the single-host container deployment.

    This class provides a centralized location for all deployment-related
    constants, making them easy to find, update, and test.

    All attributes are class-level and immutable.
    """

    # Image and container identifiers
    IMAGE_TAG: str = "new-api:local"
    COMPOSE_SERVICE_NAME: str = "new-api"
    CONTAINER_NAME: str = "new-api"

    # systemd unit
    UNIT_NAME: str = "new-api-deploy"
    UNIT_START_TIMEOUT_SECONDS: int = 300

    # Container-side mount points
    CONTAINER_DATA_DIR: str = "/data"
    CONTAINER_LOGS_DIR: str = "/app/logs"

    # Health probe
    HEALTH_STATUS_PATH: str = "/api/status"
    HEALTH_INTERVAL: str = "30s"
    HEALTH_TIMEOUT: str = "10s"
    HEALTH_RETRIES: int = 3

    # Operator-facing defaults
    SETTLE_SECONDS: float = 3.0
    DEFAULT_LOG_LINES: int = 100
    SESSION_SECRET_LENGTH: int = 32

    # Files under the configuration directory
    CONFIG_DIR_NAME: str = ".new-api-deploy"
    CONFIG_FILE_NAME: str = "config.env"
    COMPOSE_FILE_NAME: str = "docker-compose.yml"
    LOCK_FILE_NAME: str = "deploy.lock"

    @property
    def unit_file_name(self) -> str:
        return f"{self.UNIT_NAME}.service"


DEFAULT_CONSTANTS = DeploymentConstants()


def default_config_dir() -> Path:
    """Get the default configuration directory (``~/.new-api-deploy``)."""
    return Path.home() / DEFAULT_CONSTANTS.CONFIG_DIR_NAME


class DeploymentPaths:
    """Path resolver for deployment-related directories and files.

    This class constructs and provides access to all paths needed during
    deployment, derived from the configuration directory and the source
    checkout being deployed.
    """

    def __init__(
        self,
        config_dir: Path,
        project_dir: Path,
        *,
        systemd_dir: Path = Path("/etc/systemd/system"),
    ) -> None:
        """Initialize deployment paths.

        Args:
            config_dir: Directory holding the config file and manifest
            project_dir: Git checkout containing the Dockerfile
            systemd_dir: Directory where unit files are installed
        """
        self._constants = DEFAULT_CONSTANTS
        self.config_dir = Path(config_dir).expanduser()
        self.project_dir = Path(project_dir).expanduser()
        self.systemd_dir = systemd_dir

    @property
    def config_file(self) -> Path:
        """Get path to the persisted deployment configuration."""
        return self.config_dir / self._constants.CONFIG_FILE_NAME

    @property
    def compose_file(self) -> Path:
        """Get path to the rendered compose manifest."""
        return self.config_dir / self._constants.COMPOSE_FILE_NAME

    @property
    def lock_file(self) -> Path:
        return self.config_dir / self._constants.LOCK_FILE_NAME

    @property
    def default_data_dir(self) -> Path:
        """Get the data directory offered when none is configured."""
        return self.config_dir / "data"

    @property
    def service_file(self) -> Path:
        """Get path to the systemd unit file."""
        return self.systemd_dir / self._constants.unit_file_name

    def data_root(self, data_dir: str) -> Path:
        """Resolve the configured data directory (falls back to the default)."""
        return Path(data_dir).expanduser() if data_dir else self.default_data_dir

    def host_data_dir(self, data_dir: str) -> Path:
        """Get the host directory mounted at the container's data path."""
        return self.data_root(data_dir) / "data"

    def host_logs_dir(self, data_dir: str) -> Path:
        """Get the host directory mounted at the container's log path."""
        return self.data_root(data_dir) / "logs"

    def ensure_config_dir(self) -> Path:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        return self.config_dir
