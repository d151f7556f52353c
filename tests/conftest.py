"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.cli.deployment.config_store import ConfigStore, DeploymentConfig
from src.cli.deployment.shell_commands import ShellCommands
from src.cli.shared.compose import ComposeRunner
from src.infra.constants import DeploymentPaths
from tests.helpers import RecordingRunner


@pytest.fixture
def runner(tmp_path: Path) -> RecordingRunner:
    return RecordingRunner(tmp_path)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    path = tmp_path / "new-api"
    path.mkdir()
    return path


@pytest.fixture
def paths(tmp_path: Path, project_dir: Path) -> DeploymentPaths:
    return DeploymentPaths(
        tmp_path / "config", project_dir, systemd_dir=tmp_path / "systemd"
    )


@pytest.fixture
def store(paths: DeploymentPaths) -> ConfigStore:
    return ConfigStore(paths.config_file)


@pytest.fixture
def commands(runner: RecordingRunner, project_dir: Path) -> ShellCommands:
    return ShellCommands(project_dir, runner=runner)  # type: ignore[arg-type]


@pytest.fixture
def compose(runner: RecordingRunner, paths: DeploymentPaths) -> ComposeRunner:
    return ComposeRunner(runner, compose_file=paths.compose_file)  # type: ignore[arg-type]


@pytest.fixture
def sample_config(paths: DeploymentPaths) -> DeploymentConfig:
    return DeploymentConfig(
        PORT="3000",
        DATA_DIR=str(paths.config_dir / "data"),
        TZ="Asia/Shanghai",
        SQL_DSN="root:pw@tcp(db:3306)/newapi?charset=utf8mb4",
        SESSION_SECRET="s" * 32,
        BATCH_UPDATE_ENABLED="true",
        STREAMING_TIMEOUT="360",
        ERROR_LOG_ENABLED="true",
    )
