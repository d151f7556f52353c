"""Tests for project root discovery and logging setup."""

from loguru import logger

from src.utils.logging import configure_logging
from src.utils.paths import find_project_root


def test_find_project_root_walks_up_to_git(tmp_path):
    (tmp_path / ".git").mkdir()
    nested = tmp_path / "web" / "src"
    nested.mkdir(parents=True)

    assert find_project_root(nested) == tmp_path


def test_find_project_root_falls_back_to_start(tmp_path):
    start = tmp_path / "plain"
    start.mkdir()

    assert find_project_root(start) == start.resolve()


def test_configure_logging_levels(capsys):
    try:
        configure_logging(verbose=False)
        logger.debug("hidden trace")
        logger.warning("visible warning")
        assert "hidden trace" not in capsys.readouterr().err

        configure_logging(verbose=True)
        logger.debug("shown trace")
        assert "shown trace" in capsys.readouterr().err
    finally:
        logger.remove()
