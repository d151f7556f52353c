"""Source tree synchronization.

The deployed checkout always mirrors its remote tracking branch exactly:
local commits and modifications are discarded by a hard reset. A deploy
never proceeds from a source tree in an unknown state.
"""

from __future__ import annotations

from pathlib import Path

from src.utils.console_like import ConsoleLike, coalesce_console

from .errors import SyncFailure
from .shell_commands import GitCommands, SyncResult


class SourceSyncer:
    """Fetches and hard-resets a checkout to its remote tracking branch."""

    def __init__(self, git: GitCommands, console: ConsoleLike | None = None) -> None:
        """Initialize the syncer.

        Args:
            git: Git command adapter
            console: Console for operator output
        """
        self.git = git
        self.console = coalesce_console(console)

    def sync(self, working_dir: Path) -> SyncResult:
        """Synchronize a checkout with ``origin/<current branch>``.

        Args:
            working_dir: Root of the git checkout

        Returns:
            SyncResult with the branch and old/new short revisions

        Raises:
            SyncFailure: If the directory is not a repository, HEAD is
                detached, or fetching/resetting fails
        """
        self.console.step("Updating source code...")

        status = self.git.get_status(working_dir)
        if not status.is_git_repo:
            raise SyncFailure(
                f"{working_dir} is not a git repository",
                details="Run the deployer from (or point --project-dir at) "
                "a clone of the service repository.",
            )
        if status.branch is None:
            raise SyncFailure(
                "Cannot determine the tracking branch (detached HEAD?)",
                details=f"Check out a branch in {working_dir} and try again.",
            )
        if status.short_sha is None:
            raise SyncFailure(f"Cannot read the current revision in {working_dir}")

        branch = status.branch
        old_revision = status.short_sha
        self.console.info(f"Current branch: {branch}")

        self.console.info("Fetching remote updates...")
        fetch = self.git.fetch_all(working_dir)
        if not fetch.success:
            raise SyncFailure(
                f"git fetch failed (exit code {fetch.returncode})",
                details=fetch.output or None,
            )

        remote_ref = f"origin/{branch}"
        reset = self.git.reset_hard(remote_ref, working_dir)
        if not reset.success:
            raise SyncFailure(
                f"git reset --hard {remote_ref} failed (exit code {reset.returncode})",
                details=reset.output or None,
            )

        new_revision = self.git.short_sha(working_dir)
        if new_revision is None:
            raise SyncFailure(f"Cannot read the revision after resetting to {remote_ref}")

        result = SyncResult(
            branch=branch, old_revision=old_revision, new_revision=new_revision
        )
        if result.changed:
            self.console.ok(f"Code updated: {old_revision} -> {new_revision}")
        else:
            self.console.ok(f"Code is already up to date ({new_revision})")
        return result
