"""Deployment module for the single-host New API container deployment.

This package provides:
- ConfigStore / InteractiveConfigurator: persisted deployment configuration
- ManifestRenderer: compose manifest generation
- SourceSyncer: git checkout synchronization
- ContainerDeployer: the deploy/update sequence and service controls
- ServiceRegistrar: systemd boot-time registration

The package is organized into subpackages for modularity:
- shell_commands: Abstractions for shell command execution
"""

from .config_store import ConfigStore, DeploymentConfig
from .configurator import InteractiveConfigurator
from .container_deployer import ContainerDeployer, DeploymentState
from .errors import (
    BuildFailure,
    DependencyMissing,
    DeploymentError,
    DeploymentInProgress,
    InvalidValue,
    MissingRequiredField,
    NotConfigured,
    PermissionDenied,
    SyncFailure,
)
from .manifest import ManifestRenderer, OrchestrationManifest
from .service_registrar import ServiceRegistrar
from .source_sync import SourceSyncer

__all__ = [
    "ConfigStore",
    "DeploymentConfig",
    "InteractiveConfigurator",
    "ContainerDeployer",
    "DeploymentState",
    "ManifestRenderer",
    "OrchestrationManifest",
    "ServiceRegistrar",
    "SourceSyncer",
    "DeploymentError",
    "NotConfigured",
    "MissingRequiredField",
    "InvalidValue",
    "SyncFailure",
    "BuildFailure",
    "PermissionDenied",
    "DependencyMissing",
    "DeploymentInProgress",
]
