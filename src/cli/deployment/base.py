"""Deployer interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from src.infra.constants import DeploymentPaths
from src.utils.console_like import ConsoleLike


class BaseDeployer(ABC):
    """Common surface of a deployment target: deploy, teardown, status."""

    def __init__(self, console: ConsoleLike, paths: DeploymentPaths):
        """Bind the deployer to its output and path layout.

        Args:
            console: Where operator messages go
            paths: Config directory and source checkout locations
        """
        self.console = console
        self.paths = paths

    @property
    def project_root(self) -> Path:
        return self.paths.project_dir

    @abstractmethod
    def deploy(self, **kwargs: Any) -> Any:
        """Bring the service up to date and running."""

    @abstractmethod
    def teardown(self, **kwargs: Any) -> None:
        """Stop the running service."""

    @abstractmethod
    def show_status(self) -> None:
        """Print the current state of the service."""

    def ensure_data_directories(
        self, data_dir: str, subdirectories: Iterable[str | Path]
    ) -> Path:
        """Create the host bind-mount directories under the data root.

        Args:
            data_dir: Configured data root (empty selects the default)
            subdirectories: Paths relative to the data root

        Returns:
            The resolved data root
        """
        data_root = self.paths.data_root(data_dir)
        for sub_path in ("", *subdirectories):
            (data_root / sub_path).mkdir(parents=True, exist_ok=True)
        return data_root
