"""Deployment error taxonomy.

Every fatal condition raised by the deployment core is a DeploymentError,
so CLI commands can render them uniformly (message plus optional details)
and exit with status 1. Best-effort failures are not exceptions: they are
logged as warnings where they happen.
"""

from __future__ import annotations


class DeploymentError(Exception):
    """Raised when a deployment operation fails."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotConfigured(DeploymentError):
    """No deployment configuration has been written yet."""


class MissingRequiredField(DeploymentError):
    """A mandatory configuration value was left empty."""

    def __init__(self, field: str, details: str | None = None):
        self.field = field
        super().__init__(f"{field} is required", details=details)


class InvalidValue(DeploymentError):
    """A configuration value cannot be stored in the line-oriented file."""


class SyncFailure(DeploymentError):
    """The source tree could not be synchronized with its remote."""


class BuildFailure(DeploymentError):
    """The image build exited with a non-zero status."""


class PermissionDenied(DeploymentError):
    """The operation requires administrative privileges."""


class DependencyMissing(DeploymentError):
    """A required external command is not installed."""

    def __init__(self, command: str, details: str | None = None):
        self.command = command
        super().__init__(
            f"Required command '{command}' is not installed", details=details
        )


class DeploymentInProgress(DeploymentError):
    """Another deploy or update holds the deployment lock."""
