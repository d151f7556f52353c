"""Tests for external tool checks."""

import pytest

from src.cli.deployment.dependencies import check_dependencies, detect_compose_command
from src.cli.deployment.errors import DependencyMissing
from tests.helpers import fail


@pytest.fixture
def all_installed(monkeypatch):
    monkeypatch.setattr(
        "src.cli.deployment.dependencies.shutil.which", lambda name: f"/usr/bin/{name}"
    )


def test_prefers_compose_plugin(runner, all_installed):
    assert check_dependencies(runner) == ("docker", "compose")
    assert runner.calls == [["docker", "compose", "version"]]


def test_falls_back_to_standalone_compose(runner):
    runner.respond(["docker", "compose"], fail("'compose' is not a docker command"))

    assert detect_compose_command(runner) == ("docker-compose",)


def test_missing_compose(runner):
    runner.respond(["docker", "compose"], fail())
    runner.respond(["docker-compose"], fail(returncode=127))

    with pytest.raises(DependencyMissing) as excinfo:
        detect_compose_command(runner)

    assert "docker compose" in excinfo.value.message


@pytest.mark.parametrize("missing", ["git", "docker"])
def test_missing_executable(runner, monkeypatch, missing):
    monkeypatch.setattr(
        "src.cli.deployment.dependencies.shutil.which",
        lambda name: None if name == missing else f"/usr/bin/{name}",
    )

    with pytest.raises(DependencyMissing) as excinfo:
        check_dependencies(runner)

    assert excinfo.value.command == missing
    assert runner.calls == []
