"""Data types for shell command results.

This module contains all dataclasses and type definitions used across
the shell command modules.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "CommandResult",
    "GitStatus",
    "SyncResult",
]


@dataclass
class CommandResult:
    """Result of a command execution."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0

    @property
    def output(self) -> str:
        """Best available diagnostic text (stderr first, then stdout)."""
        return (self.stderr or self.stdout).strip()


@dataclass
class GitStatus:
    """Git repository status information.

    Attributes:
        is_git_repo: Whether the directory is a git repository
        branch: Current branch name, or None if HEAD is detached/unknown
        short_sha: Short commit SHA of HEAD, or None if not available
    """

    is_git_repo: bool
    branch: str | None
    short_sha: str | None


@dataclass(frozen=True)
class SyncResult:
    """Outcome of a source synchronization.

    Attributes:
        branch: Tracking branch that was reset to its remote tip
        old_revision: Short SHA before the sync
        new_revision: Short SHA after the sync
    """

    branch: str
    old_revision: str
    new_revision: str

    @property
    def changed(self) -> bool:
        return self.old_revision != self.new_revision
