"""External tool checks.

The deployer drives git, docker and a compose implementation as external
processes. Their absence is fatal at startup.
"""

from __future__ import annotations

import shutil

from loguru import logger

from .errors import DependencyMissing
from .shell_commands import CommandRunner

COMPOSE_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("docker", "compose"),
    ("docker-compose",),
)


def require_command(name: str) -> str:
    """Resolve an executable on PATH.

    Returns:
        Absolute path to the executable

    Raises:
        DependencyMissing: If the command is not installed
    """
    path = shutil.which(name)
    if path is None:
        raise DependencyMissing(name, details=f"Install '{name}' and re-run this command.")
    return path


def detect_compose_command(runner: CommandRunner) -> tuple[str, ...]:
    """Pick the compose implementation to use.

    Prefers the ``docker compose`` plugin and falls back to the standalone
    ``docker-compose`` binary.

    Raises:
        DependencyMissing: If neither responds to ``version``
    """
    for candidate in COMPOSE_CANDIDATES:
        if runner.run([*candidate, "version"]).success:
            logger.debug(f"Using compose command: {' '.join(candidate)}")
            return candidate
    raise DependencyMissing(
        "docker compose",
        details="Install the Docker Compose plugin or the docker-compose binary.",
    )


def check_dependencies(runner: CommandRunner) -> tuple[str, ...]:
    """Verify git, docker and compose are available.

    Returns:
        The compose command prefix to use

    Raises:
        DependencyMissing: Naming the first missing command
    """
    require_command("git")
    require_command("docker")
    return detect_compose_command(runner)
