"""Git command abstractions.

This module provides commands for Git repository operations used to
synchronize the deployed source tree with its remote tracking branch.

GitCommands is the only place that parses ``git`` output.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .types import CommandResult, GitStatus

if TYPE_CHECKING:
    from .runner import CommandRunner


class GitCommands:
    """Git-related shell commands.

    Provides operations for:
    - Repository and branch detection
    - Commit SHA retrieval
    - Fetching and hard-resetting to a remote reference
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize Git commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    def get_status(self, cwd: Path | None = None) -> GitStatus:
        """Get the current git repository status.

        Checks if the directory is a git repository, which branch is checked
        out, and retrieves the current commit SHA.

        Args:
            cwd: Repository directory (defaults to the runner's project root)

        Returns:
            GitStatus with repository state information

        Example:
            >>> status = git.get_status()
            >>> if status.branch:
            ...     print(f"On {status.branch} at {status.short_sha}")
        """
        inside = self._runner.run(["git", "rev-parse", "--is-inside-work-tree"], cwd=cwd)
        if not inside.success or inside.stdout.strip() != "true":
            return GitStatus(is_git_repo=False, branch=None, short_sha=None)

        branch_result = self._runner.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd
        )
        branch = branch_result.stdout.strip() if branch_result.success else ""
        # "HEAD" is what git reports for a detached checkout
        if branch in ("", "HEAD"):
            branch = None

        return GitStatus(
            is_git_repo=True, branch=branch, short_sha=self.short_sha(cwd)
        )

    def short_sha(self, cwd: Path | None = None) -> str | None:
        """Get the short SHA of HEAD, or None if it cannot be resolved."""
        result = self._runner.run(["git", "rev-parse", "--short", "HEAD"], cwd=cwd)
        return result.stdout.strip() if result.success else None

    def fetch_all(self, cwd: Path | None = None) -> CommandResult:
        """Fetch every remote, pruning deleted remote branches."""
        return self._runner.run(["git", "fetch", "--all", "--prune"], cwd=cwd)

    def reset_hard(self, ref: str, cwd: Path | None = None) -> CommandResult:
        """Reset the working tree and index to a reference, discarding local changes."""
        return self._runner.run(["git", "reset", "--hard", ref], cwd=cwd)
