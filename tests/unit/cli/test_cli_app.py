"""Tests for the command-line surface and exit codes."""

import pytest
from typer.testing import CliRunner

from src.cli import app
from src.cli.deployment.errors import DependencyMissing
from src.cli.deployment.shell_commands import CommandRunner
from tests.helpers import RecordingRunner


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr("src.cli.configure_logging", lambda verbose=False: None)


@pytest.fixture
def cli():
    return CliRunner()


@pytest.fixture
def recording(monkeypatch, tmp_path):
    recording = RecordingRunner(tmp_path)
    monkeypatch.setattr(CommandRunner, "run", recording.run)
    return recording


@pytest.fixture
def deps_ok(monkeypatch):
    calls = []

    def _check(runner):
        calls.append(runner)
        return ("docker", "compose")

    monkeypatch.setattr("src.cli.check_dependencies", _check)
    return calls


@pytest.fixture
def base_args(tmp_path):
    return ["--config-dir", str(tmp_path / "cfg"), "--project-dir", str(tmp_path)]


def test_unknown_command_exits_1(cli, deps_ok, base_args):
    result = cli.invoke(app, [*base_args, "frobnicate"])

    assert result.exit_code == 1


def test_missing_dependency_exits_1(cli, monkeypatch, base_args):
    def _missing(_runner):
        raise DependencyMissing("docker")

    monkeypatch.setattr("src.cli.check_dependencies", _missing)

    result = cli.invoke(app, [*base_args, "status"])

    assert result.exit_code == 1
    assert "docker" in result.output


def test_help_skips_dependency_check(cli, deps_ok, base_args):
    result = cli.invoke(app, [*base_args, "help"])

    assert result.exit_code == 0
    assert "install-service" in result.output
    assert deps_ok == []


def test_update_without_configuration_exits_1(cli, deps_ok, recording, base_args):
    result = cli.invoke(app, [*base_args, "update"])

    assert result.exit_code == 1
    assert "not configured" in result.output
    assert recording.calls == []


def test_install_service_requires_root(cli, deps_ok, recording, monkeypatch, base_args, tmp_path):
    monkeypatch.setattr("src.cli.deployment.service_registrar.os.geteuid", lambda: 1000)

    result = cli.invoke(app, [*base_args, "install-service"])

    assert result.exit_code == 1
    assert "root" in result.output
    assert recording.calls == []


def test_status_without_manifest_uses_docker(cli, deps_ok, recording, base_args):
    result = cli.invoke(app, [*base_args, "status"])

    assert result.exit_code == 0
    assert recording.calls[0][:2] == ["docker", "ps"]


def test_logs_arguments(cli, deps_ok, recording, base_args):
    result = cli.invoke(app, [*base_args, "logs", "200", "--no-follow"])

    assert result.exit_code == 0
    assert recording.calls == [["docker", "logs", "--tail", "200", "new-api"]]


def test_config_directory_from_environment(cli, deps_ok, recording, monkeypatch, tmp_path):
    monkeypatch.setenv("NEWAPI_DEPLOY_HOME", str(tmp_path / "from-env"))

    result = cli.invoke(app, ["--project-dir", str(tmp_path), "status"])

    assert result.exit_code == 0
    assert (tmp_path / "from-env").is_dir()


def test_menu_exits_on_zero(cli, deps_ok, recording, base_args):
    result = cli.invoke(app, base_args, input="0\n")

    assert result.exit_code == 0
    assert "not configured" in result.output
    assert "Bye" in result.output


def test_menu_continues_after_errors(cli, deps_ok, recording, base_args):
    result = cli.invoke(app, base_args, input="3\n\n42\n\n4\n\n0\n")

    assert result.exit_code == 0
    assert "not configured" in result.output
    assert "Invalid choice" in result.output
    assert ["docker", "ps"] == recording.calls[0][:2]
