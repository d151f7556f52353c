"""Process execution shared by every tool adapter."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from .types import CommandResult


class CommandRunner:
    """Runs external commands and normalizes the outcome to CommandResult.

    Output is captured by default; long-running commands whose progress the
    operator should see (builds, log streaming) pass ``capture_output=False``
    so they write straight to the terminal.
    """

    def __init__(self, project_root: Path) -> None:
        """Create a runner.

        Args:
            project_root: Working directory used when a call gives no ``cwd``
        """
        self.project_root = project_root

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_output: bool = True,
    ) -> CommandResult:
        """Run a command to completion.

        A missing executable yields a failed result with exit code 127, the
        same status a shell reports, instead of an exception.

        Args:
            cmd: Executable followed by its arguments
            cwd: Working directory override
            capture_output: Capture stdout/stderr instead of inheriting them

        Returns:
            CommandResult describing the exit status and any captured output
        """
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            completed = subprocess.run(
                list(cmd),
                cwd=cwd or self.project_root,
                capture_output=capture_output,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            logger.debug(f"Executable not found: {cmd[0]}")
            return CommandResult(success=False, stderr=str(e), returncode=127)

        if completed.returncode != 0:
            logger.debug(f"{cmd[0]} exited with {completed.returncode}")
        return CommandResult(
            success=completed.returncode == 0,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
        )
