"""Single-deployer lock.

Deploys and updates take an exclusive advisory lock on a file in the
configuration directory, so two operators cannot interleave a teardown and a
startup on the same host. The lock is released when the process exits, even
if it is killed mid-deploy.
"""

from __future__ import annotations

import fcntl
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from loguru import logger

from .errors import DeploymentInProgress


@contextmanager
def deployment_lock(lock_path: Path) -> Iterator[None]:
    """Hold the deployment lock for the duration of the block.

    Args:
        lock_path: Lock file location (created if missing)

    Raises:
        DeploymentInProgress: If another process already holds the lock
    """
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    with open(lock_path, "a+") as f:
        try:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            f.seek(0)
            holder = f.read().strip() or "unknown"
            raise DeploymentInProgress(
                "Another deploy or update is already running",
                details=f"Lock held by PID {holder} ({lock_path})",
            ) from None

        f.seek(0)
        f.truncate()
        f.write(str(os.getpid()))
        f.flush()
        logger.debug(f"Acquired deployment lock {lock_path}")
        try:
            yield
        finally:
            f.seek(0)
            f.truncate()
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
            logger.debug(f"Released deployment lock {lock_path}")
