"""Tests for ComposeRunner helper."""

from pathlib import Path

import pytest

from src.cli.shared.compose import ComposeRunner
from tests.helpers import RecordingRunner

COMPOSE_FILE = Path("/home/ops/.new-api-deploy/docker-compose.yml")


@pytest.fixture
def recording():
    return RecordingRunner()


@pytest.fixture
def compose_runner(recording):
    """Create a ComposeRunner instance for testing."""
    return ComposeRunner(recording, compose_file=COMPOSE_FILE)


def test_base_cmd_with_plugin(compose_runner):
    """Test that base command uses the compose plugin by default."""
    assert compose_runner._base_cmd() == ["docker", "compose", "-f", str(COMPOSE_FILE)]


def test_base_cmd_with_standalone_binary(recording):
    runner = ComposeRunner(
        recording, compose_file=COMPOSE_FILE, compose_command=["docker-compose"]
    )

    assert runner._base_cmd() == ["docker-compose", "-f", str(COMPOSE_FILE)]


def test_run_uses_manifest_directory(compose_runner, recording):
    """Test that run() executes from the manifest directory."""
    compose_runner.run(["config"])

    assert recording.calls == [["docker", "compose", "-f", str(COMPOSE_FILE), "config"]]
    assert recording.cwds == [COMPOSE_FILE.parent]


def test_up_detached(compose_runner, recording):
    compose_runner.up()

    assert recording.calls[-1][-2:] == ["up", "-d"]


def test_down_remove_orphans(compose_runner, recording):
    compose_runner.down(remove_orphans=True)
    compose_runner.down()

    assert recording.calls[0][-2:] == ["down", "--remove-orphans"]
    assert recording.calls[1][-1] == "down"


def test_logs_options(compose_runner, recording):
    compose_runner.logs(tail=50, follow=True)

    assert recording.calls == [
        ["docker", "compose", "-f", str(COMPOSE_FILE), "logs", "--tail", "50", "-f"]
    ]


def test_restart_and_ps(compose_runner, recording):
    compose_runner.restart()
    compose_runner.ps()

    assert [call[-1] for call in recording.calls] == ["restart", "ps"]
