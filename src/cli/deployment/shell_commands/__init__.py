"""External process adapters for the deployer.

Each tool the deployer drives gets its own adapter module, and every adapter
funnels through one CommandRunner so tests can swap in a recording double:

- docker: image id lookup, build, rmi/prune and plain-container fallbacks
- git: branch/revision reads, fetch and hard reset
- systemctl: unit reload, enable, disable and stop

Adapters return CommandResult (or parsed values) and never raise on a
non-zero exit; deciding whether a failure is fatal is the caller's job.

Usage:
    from src.cli.deployment.shell_commands import ShellCommands

    commands = ShellCommands(Path("/srv/new-api"))
    old_id = commands.docker.image_id("new-api:local")
"""

from pathlib import Path

from .docker import DockerCommands
from .git import GitCommands
from .runner import CommandRunner
from .systemctl import SystemctlCommands
from .types import CommandResult, GitStatus, SyncResult


class ShellCommands:
    """Bundle of tool adapters sharing a single runner.

    Attributes:
        runner: Runner every adapter executes through
        docker: Image and container commands
        git: Source checkout commands
        systemctl: systemd unit commands
    """

    def __init__(self, project_root: Path, runner: CommandRunner | None = None) -> None:
        """Wire the adapters.

        Args:
            project_root: Source checkout; the default working directory
            runner: Runner to share (a real CommandRunner when omitted)
        """
        self._project_root = Path(project_root)
        self.runner = runner or CommandRunner(self._project_root)

        self.docker = DockerCommands(self.runner)
        self.git = GitCommands(self.runner)
        self.systemctl = SystemctlCommands(self.runner)

    @property
    def project_root(self) -> Path:
        return self._project_root


__all__ = [
    "ShellCommands",
    "CommandRunner",
    "CommandResult",
    "GitStatus",
    "SyncResult",
    "DockerCommands",
    "GitCommands",
    "SystemctlCommands",
]
