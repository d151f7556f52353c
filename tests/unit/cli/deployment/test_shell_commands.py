"""Tests for the docker, git and systemctl command adapters."""

import subprocess
from pathlib import Path
from unittest.mock import patch

from src.cli.deployment.shell_commands import CommandRunner, ShellCommands
from tests.helpers import fail, ok


def test_image_id_takes_first_line(commands, runner):
    runner.respond(["docker", "images", "-q"], ok("abc123\ndef456\n"))

    assert commands.docker.image_id("new-api:local") == "abc123"
    assert runner.calls == [["docker", "images", "-q", "new-api:local"]]


def test_image_id_empty_when_missing_or_failing(commands, runner):
    runner.respond(["docker", "images", "-q"], ok(""), fail("daemon not running"))

    assert commands.docker.image_id("new-api:local") == ""
    assert commands.docker.image_id("new-api:local") == ""


def test_build_image_streams_in_context_dir(commands, runner, project_dir):
    commands.docker.build_image("new-api:local", project_dir)

    assert runner.calls == [["docker", "build", "-t", "new-api:local", "."]]
    assert runner.cwds == [project_dir]


def test_git_status_detached_head(commands, runner):
    runner.respond(["git", "rev-parse", "--is-inside-work-tree"], ok("true\n"))
    runner.respond(["git", "rev-parse", "--abbrev-ref"], ok("HEAD\n"))
    runner.respond(["git", "rev-parse", "--short"], ok("abc1234\n"))

    status = commands.git.get_status()

    assert status.is_git_repo
    assert status.branch is None
    assert status.short_sha == "abc1234"


def test_git_status_outside_repository(commands, runner):
    runner.respond(["git", "rev-parse"], fail("fatal: not a git repository", 128))

    status = commands.git.get_status()

    assert not status.is_git_repo
    assert runner.calls == [["git", "rev-parse", "--is-inside-work-tree"]]


def test_systemctl_commands(commands, runner):
    commands.systemctl.daemon_reload()
    commands.systemctl.enable("new-api-deploy")
    commands.systemctl.stop("new-api-deploy")
    commands.systemctl.disable("new-api-deploy")

    assert runner.calls == [
        ["systemctl", "daemon-reload"],
        ["systemctl", "enable", "new-api-deploy"],
        ["systemctl", "stop", "new-api-deploy"],
        ["systemctl", "disable", "new-api-deploy"],
    ]


@patch("subprocess.run")
def test_runner_wraps_completed_process(mock_run, tmp_path):
    mock_run.return_value = subprocess.CompletedProcess(
        args=["docker", "images"], returncode=0, stdout="abc\n", stderr=""
    )

    result = CommandRunner(tmp_path).run(["docker", "images"])

    assert result.success
    assert result.stdout == "abc\n"
    mock_run.assert_called_once_with(
        ["docker", "images"], cwd=tmp_path, capture_output=True, text=True, check=False
    )


@patch("subprocess.run")
def test_runner_reports_failure(mock_run, tmp_path):
    mock_run.return_value = subprocess.CompletedProcess(
        args=["git", "fetch"], returncode=128, stdout="", stderr="fatal: no remote\n"
    )

    result = CommandRunner(tmp_path).run(["git", "fetch"], cwd=Path("/srv/app"))

    assert not result.success
    assert result.returncode == 128
    assert result.output == "fatal: no remote"
    assert mock_run.call_args.kwargs["cwd"] == Path("/srv/app")


@patch("subprocess.run", side_effect=FileNotFoundError("No such file: 'docker-compose'"))
def test_runner_missing_executable(_mock_run, tmp_path):
    result = CommandRunner(tmp_path).run(["docker-compose", "version"])

    assert not result.success
    assert result.returncode == 127


def test_shell_commands_share_runner(tmp_path):
    commands = ShellCommands(tmp_path)

    assert commands.project_root == tmp_path
    assert commands.runner.project_root == tmp_path
