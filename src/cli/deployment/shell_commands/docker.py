"""Docker command abstractions.

This module provides commands for Docker image and container operations:
inspecting image ids, building, removing and pruning images, and the
plain-container fallbacks used when no compose manifest exists.

DockerCommands is the only place that parses ``docker`` output.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner


class DockerCommands:
    """Docker-related shell commands.

    Provides operations for:
    - Image management (id lookup, build, remove, prune)
    - Container management (status, logs, stop, remove, restart)
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize Docker commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    # =========================================================================
    # Image Management
    # =========================================================================

    def image_id(self, image_tag: str) -> str:
        """Get the local image id for a tag.

        Args:
            image_tag: Full image tag (e.g., "new-api:local")

        Returns:
            The short image id, or an empty string if no such image exists

        Example:
            >>> docker.image_id("new-api:local")
            'a1b2c3d4e5f6'
        """
        result = self._runner.run(["docker", "images", "-q", image_tag])
        if not result.success:
            return ""
        lines = result.stdout.strip().splitlines()
        return lines[0].strip() if lines else ""

    def build_image(self, image_tag: str, context_dir: Path) -> CommandResult:
        """Build an image from the Dockerfile in a directory.

        Build output is streamed to the terminal.

        Args:
            image_tag: Tag to apply to the built image
            context_dir: Build context containing the Dockerfile

        Returns:
            CommandResult with build status
        """
        return self._runner.run(
            ["docker", "build", "-t", image_tag, "."],
            cwd=context_dir,
            capture_output=False,
        )

    def remove_image(self, image_id: str) -> CommandResult:
        """Remove an image by id.

        Fails if a container still references the image.
        """
        return self._runner.run(["docker", "rmi", image_id])

    def prune_dangling_images(self) -> CommandResult:
        """Remove all dangling images without prompting."""
        return self._runner.run(["docker", "image", "prune", "-f"])

    # =========================================================================
    # Container Management
    # =========================================================================

    def ps(self, name_filter: str) -> CommandResult:
        """Show containers matching a name filter as a table."""
        return self._runner.run(
            [
                "docker",
                "ps",
                "--filter",
                f"name={name_filter}",
                "--format",
                "table {{.Names}}\t{{.Status}}\t{{.Ports}}",
            ],
            capture_output=False,
        )

    def logs(self, container: str, *, tail: int, follow: bool) -> CommandResult:
        """Stream the logs of a single container."""
        cmd = ["docker", "logs", "--tail", str(tail)]
        if follow:
            cmd.append("-f")
        cmd.append(container)
        return self._runner.run(cmd, capture_output=False)

    def stop_container(self, container: str) -> CommandResult:
        return self._runner.run(["docker", "stop", container])

    def remove_container(self, container: str) -> CommandResult:
        return self._runner.run(["docker", "rm", container])

    def restart_container(self, container: str) -> CommandResult:
        return self._runner.run(["docker", "restart", container])
