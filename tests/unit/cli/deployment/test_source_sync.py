"""Tests for SourceSyncer."""

import pytest

from src.cli.deployment.errors import SyncFailure
from src.cli.deployment.source_sync import SourceSyncer
from tests.helpers import ScriptedConsole, fail, ok


@pytest.fixture
def syncer(commands):
    return SourceSyncer(commands.git, ScriptedConsole())


def _repo(runner, branch="main", shas=("abc1234", "def5678")):
    runner.respond(["git", "rev-parse", "--is-inside-work-tree"], ok("true\n"))
    runner.respond(["git", "rev-parse", "--abbrev-ref", "HEAD"], ok(f"{branch}\n"))
    runner.respond(["git", "rev-parse", "--short", "HEAD"], *(ok(f"{s}\n") for s in shas))


def test_sync_fetches_and_resets_to_tracking_branch(syncer, runner, project_dir):
    _repo(runner, branch="release")

    result = syncer.sync(project_dir)

    assert result.branch == "release"
    assert result.old_revision == "abc1234"
    assert result.new_revision == "def5678"
    assert result.changed
    assert runner.index_of("git", "fetch", "--all", "--prune") < runner.index_of(
        "git", "reset", "--hard"
    )
    assert runner.called("git", "reset") == [["git", "reset", "--hard", "origin/release"]]
    assert set(runner.cwds) == {project_dir}


def test_sync_reports_up_to_date(syncer, runner, project_dir):
    _repo(runner, shas=("abc1234",))

    result = syncer.sync(project_dir)

    assert not result.changed
    assert "already up to date" in syncer.console.text("ok")


def test_not_a_repository(syncer, runner, project_dir):
    runner.respond(["git", "rev-parse", "--is-inside-work-tree"], fail("not a git repository", 128))

    with pytest.raises(SyncFailure, match="not a git repository"):
        syncer.sync(project_dir)

    assert runner.called("git", "fetch") == []


def test_detached_head_is_rejected(syncer, runner, project_dir):
    _repo(runner, branch="HEAD")

    with pytest.raises(SyncFailure, match="detached HEAD"):
        syncer.sync(project_dir)

    assert runner.called("git", "reset") == []


def test_fetch_failure_carries_git_stderr(syncer, runner, project_dir):
    _repo(runner)
    runner.respond(["git", "fetch"], fail("could not resolve host: github.com", 128))

    with pytest.raises(SyncFailure) as excinfo:
        syncer.sync(project_dir)

    assert "exit code 128" in excinfo.value.message
    assert excinfo.value.details == "could not resolve host: github.com"
    assert runner.called("git", "reset") == []


def test_reset_failure(syncer, runner, project_dir):
    _repo(runner)
    runner.respond(["git", "reset"], fail("unknown revision origin/main"))

    with pytest.raises(SyncFailure, match="origin/main"):
        syncer.sync(project_dir)


def test_sync_without_console_prints_plain_lines(commands, runner, project_dir, capsys):
    _repo(runner, shas=("abc1234",))

    SourceSyncer(commands.git).sync(project_dir)

    out = capsys.readouterr().out
    assert "[STEP] Updating source code..." in out
    assert "[OK] Code is already up to date (abc1234)" in out
