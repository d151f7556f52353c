"""systemctl command abstractions.

This module provides the handful of systemd operations needed to register
the deployment as a boot-time service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner


class SystemctlCommands:
    """systemd unit management commands."""

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize systemctl commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    def daemon_reload(self) -> CommandResult:
        """Reload the systemd manager configuration (unit cache)."""
        return self._runner.run(["systemctl", "daemon-reload"])

    def enable(self, unit: str) -> CommandResult:
        """Enable a unit for automatic start at boot."""
        return self._runner.run(["systemctl", "enable", unit])

    def disable(self, unit: str) -> CommandResult:
        return self._runner.run(["systemctl", "disable", unit])

    def stop(self, unit: str) -> CommandResult:
        return self._runner.run(["systemctl", "stop", unit])
