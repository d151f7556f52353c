"""Docker Compose command helpers."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from src.cli.deployment.shell_commands import CommandResult, CommandRunner

DEFAULT_COMPOSE_COMMAND: tuple[str, ...] = ("docker", "compose")


class ComposeRunner:
    """Wrapper for Docker Compose commands with consistent defaults.

    Works with both the ``docker compose`` plugin and the standalone
    ``docker-compose`` binary; the caller passes whichever was detected.
    """

    def __init__(
        self,
        runner: CommandRunner,
        *,
        compose_file: Path,
        compose_command: Sequence[str] = DEFAULT_COMPOSE_COMMAND,
    ) -> None:
        self._runner = runner
        self._compose_file = compose_file
        self._compose_command = tuple(compose_command)

    @property
    def compose_file(self) -> Path:
        return self._compose_file

    @property
    def compose_command(self) -> tuple[str, ...]:
        return self._compose_command

    def _base_cmd(self) -> list[str]:
        cmd = list(self._compose_command)
        cmd.extend(["-f", str(self._compose_file)])
        return cmd

    def run(
        self,
        args: Sequence[str],
        *,
        capture_output: bool = False,
    ) -> CommandResult:
        cmd = self._base_cmd() + list(args)
        return self._runner.run(
            cmd,
            cwd=self._compose_file.parent,
            capture_output=capture_output,
        )

    def up(self, *, detach: bool = True) -> CommandResult:
        args = ["up"]
        if detach:
            args.append("-d")
        return self.run(args, capture_output=True)

    def down(self, *, remove_orphans: bool = False) -> CommandResult:
        args = ["down"]
        if remove_orphans:
            args.append("--remove-orphans")
        return self.run(args, capture_output=True)

    def ps(self) -> CommandResult:
        return self.run(["ps"])

    def logs(
        self,
        *,
        follow: bool = False,
        tail: int | None = None,
    ) -> CommandResult:
        args = ["logs"]
        if tail is not None:
            args.extend(["--tail", str(tail)])
        if follow:
            args.append("-f")
        return self.run(args)

    def restart(self) -> CommandResult:
        return self.run(["restart"])
