"""Single-host container deployer.

Runs the deploy/update sequence against the rendered compose manifest:
source sync, image rebuild, container replacement and cleanup of the image
the previous container ran on. Also carries the day-to-day service controls
(status, logs, restart, stop), which fall back to plain ``docker`` commands
when no manifest has been rendered yet.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from src.cli.shared.compose import ComposeRunner
from src.infra.constants import DEFAULT_CONSTANTS, DeploymentConstants, DeploymentPaths
from src.utils.console_like import ConsoleLike

from .base import BaseDeployer
from .config_store import ConfigStore, DeploymentConfig
from .configurator import InteractiveConfigurator
from .errors import BuildFailure, DeploymentError, NotConfigured
from .lock import deployment_lock
from .manifest import ManifestRenderer
from .shell_commands import ShellCommands, SyncResult
from .source_sync import SourceSyncer


@dataclass
class DeploymentState:
    """Outcome of one deploy run.

    Attributes:
        branch: Branch the checkout tracks
        old_revision: Short revision before the sync
        new_revision: Short revision after the sync
        old_image_id: Image id tagged before the build (empty if none)
        new_image_id: Image id tagged after the build
        old_image_removed: Whether the previous image was deleted
    """

    branch: str = ""
    old_revision: str = ""
    new_revision: str = ""
    old_image_id: str = ""
    new_image_id: str = ""
    old_image_removed: bool = False

    @property
    def code_changed(self) -> bool:
        return self.old_revision != self.new_revision


class ContainerDeployer(BaseDeployer):
    """Deploys the service with Docker Compose on the local host."""

    MOUNT_SUBDIRS = ("data", "logs")

    def __init__(
        self,
        console: ConsoleLike,
        paths: DeploymentPaths,
        commands: ShellCommands,
        compose: ComposeRunner,
        store: ConfigStore,
        *,
        configurator: InteractiveConfigurator | None = None,
        renderer: ManifestRenderer | None = None,
        constants: DeploymentConstants | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the deployer.

        Args:
            console: Console for operator output
            paths: Deployment path resolver
            commands: Shell command adapters
            compose: Compose runner bound to the manifest
            store: Configuration store
            configurator: Prompt pass run when deploying unconfigured
            renderer: Manifest renderer (re-renders on quick update)
            constants: Optional deployment constants (uses defaults if not provided)
            sleep: Delay function used before the final status check
        """
        super().__init__(console, paths)
        self.commands = commands
        self.compose = compose
        self.store = store
        self.constants = constants or DEFAULT_CONSTANTS
        self.renderer = renderer or ManifestRenderer(paths, self.constants)
        self.configurator = configurator
        self.syncer = SourceSyncer(commands.git, console)
        self._sleep = sleep

    @property
    def is_configured(self) -> bool:
        return self.store.is_configured(self.paths.compose_file)

    @property
    def _has_manifest(self) -> bool:
        return self.paths.compose_file.is_file()

    # =========================================================================
    # Deploy / update
    # =========================================================================

    def deploy(self, **kwargs: Any) -> DeploymentState:
        """Run the full deploy sequence.

        Args:
            **kwargs: Deployment options (quick: update without prompting,
                failing if the deployment is not configured)

        Returns:
            DeploymentState describing the run

        Raises:
            NotConfigured: Quick update on an unconfigured host
            SyncFailure: If the source tree could not be synchronized
            BuildFailure: If the image build fails
            DeploymentError: If the new container fails to start
        """
        quick = kwargs.get("quick", False)

        if not self.is_configured:
            if quick or self.configurator is None:
                raise NotConfigured(
                    "Deployment is not configured yet",
                    details="Run the 'config' command (or a full 'deploy') first.",
                )
            self.console.warn("No configuration found, starting the configuration wizard")
            self.configurator.run()

        with deployment_lock(self.paths.lock_file):
            config = self.store.load()
            return self._run_sequence(config, quick=quick)

    def update(self) -> DeploymentState:
        """Quick update: sync, rebuild and restart with the stored configuration."""
        return self.deploy(quick=True)

    def _run_sequence(self, config: DeploymentConfig, *, quick: bool) -> DeploymentState:
        c = self.constants
        state = DeploymentState()

        sync: SyncResult = self.syncer.sync(self.project_root)
        state.branch = sync.branch
        state.old_revision = sync.old_revision
        state.new_revision = sync.new_revision

        if quick:
            self.console.step("Regenerating compose manifest...")
            self.renderer.write(config, self.paths.compose_file)

        state.old_image_id = self.commands.docker.image_id(c.IMAGE_TAG)
        if state.old_image_id:
            logger.debug(f"Current image {c.IMAGE_TAG}: {state.old_image_id}")

        self._build_image()
        state.new_image_id = self.commands.docker.image_id(c.IMAGE_TAG)

        self._stop_old_container()
        self._purge_logs(config)
        self._start_new_container()
        state.old_image_removed = self._prune_old_image(
            state.old_image_id, state.new_image_id
        )

        self.console.info(f"Waiting {c.SETTLE_SECONDS:g}s for the service to start...")
        self._sleep(c.SETTLE_SECONDS)
        self.show_status()

        self.console.ok("Deployment complete")
        return state

    def _build_image(self) -> None:
        tag = self.constants.IMAGE_TAG
        self.console.step(f"Building image {tag}...")
        result = self.commands.docker.build_image(tag, self.project_root)
        if not result.success:
            raise BuildFailure(
                f"docker build failed (exit code {result.returncode})",
                details=result.output or f"Build context: {self.project_root}",
            )
        self.console.ok(f"Image {tag} built")

    def _stop_old_container(self) -> None:
        self.console.step("Stopping the old container...")
        result = self.compose.down(remove_orphans=True)
        if not result.success:
            logger.warning(f"compose down exited with {result.returncode}: {result.output}")
            self.console.info("Nothing to tear down")

    def _purge_logs(self, config: DeploymentConfig) -> None:
        logs_dir = self.paths.host_logs_dir(config.DATA_DIR)
        self.console.step(f"Clearing old logs in {logs_dir}...")
        try:
            self.ensure_data_directories(config.DATA_DIR, self.MOUNT_SUBDIRS)
            for entry in logs_dir.iterdir():
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
        except OSError as e:
            logger.warning(f"Failed to clear {logs_dir}: {e}")
            self.console.warn(f"Could not clear old logs: {e}")

    def _start_new_container(self) -> None:
        self.console.step("Starting the new container...")
        result = self.compose.up(detach=True)
        if not result.success:
            raise DeploymentError(
                f"Failed to start the container (exit code {result.returncode})",
                details=result.output or None,
            )
        self.console.ok("Container started")

    def _prune_old_image(self, old_id: str, new_id: str) -> bool:
        removed = False
        if old_id and old_id != new_id:
            self.console.step(f"Removing previous image {old_id}...")
            result = self.commands.docker.remove_image(old_id)
            if result.success:
                removed = True
            else:
                logger.warning(f"docker rmi {old_id} failed: {result.output}")
                self.console.warn(f"Could not remove previous image {old_id}")
        elif old_id:
            self.console.info("Image unchanged, nothing to remove")

        prune = self.commands.docker.prune_dangling_images()
        if not prune.success:
            logger.warning(f"docker image prune failed: {prune.output}")
            self.console.warn("Could not prune dangling images")
        return removed

    # =========================================================================
    # Service control
    # =========================================================================

    def show_status(self) -> None:
        """Display the service container status."""
        self.console.step("Service status:")
        if self._has_manifest:
            self.compose.ps()
        else:
            self.commands.docker.ps(self.constants.CONTAINER_NAME)

    def show_logs(self, lines: int | None = None, follow: bool = True) -> None:
        """Show (and by default follow) the service logs.

        Args:
            lines: Number of trailing lines to show
            follow: Keep streaming until interrupted
        """
        tail = lines if lines is not None else self.constants.DEFAULT_LOG_LINES
        try:
            if self._has_manifest:
                self.compose.logs(tail=tail, follow=follow)
            else:
                self.commands.docker.logs(
                    self.constants.CONTAINER_NAME, tail=tail, follow=follow
                )
        except KeyboardInterrupt:
            self.console.print()
            logger.debug("Log streaming interrupted")

    def restart(self) -> None:
        """Restart the running container and show its status."""
        self.console.step("Restarting the service...")
        if self._has_manifest:
            result = self.compose.restart()
        else:
            result = self.commands.docker.restart_container(self.constants.CONTAINER_NAME)
        if not result.success:
            raise DeploymentError(
                f"Restart failed (exit code {result.returncode})",
                details=result.output or None,
            )
        self._sleep(self.constants.SETTLE_SECONDS)
        self.show_status()

    def teardown(self, **kwargs: Any) -> None:
        """Stop and remove the service container.

        Args:
            **kwargs: Unused
        """
        self.console.step("Stopping the service...")
        if self._has_manifest:
            result = self.compose.down()
            if not result.success:
                raise DeploymentError(
                    f"compose down failed (exit code {result.returncode})",
                    details=result.output or None,
                )
        else:
            name = self.constants.CONTAINER_NAME
            for result in (
                self.commands.docker.stop_container(name),
                self.commands.docker.remove_container(name),
            ):
                if not result.success:
                    logger.debug(f"Ignoring container cleanup failure: {result.output}")
        self.console.ok("Service stopped")
