"""Tests for the interactive configuration pass."""

import pytest

from src.cli.deployment.configurator import InteractiveConfigurator, generate_session_secret
from src.cli.deployment.errors import MissingRequiredField
from src.cli.deployment.fields import CONFIG_FIELDS
from src.cli.deployment.manifest import ManifestRenderer
from tests.helpers import ScriptedConsole


def _configurator(store, paths, answers=()):
    console = ScriptedConsole(answers)
    return InteractiveConfigurator(store, console, paths, ManifestRenderer(paths)), console


def test_prompts_every_prompted_field(store, paths):
    configurator, console = _configurator(store, paths, ["", "", "", "dsn"])

    configurator.run()

    labels = [label for label, _default, _secret in console.prompts]
    assert labels == [f.label for f in CONFIG_FIELDS if f.prompted]
    assert "Database" in console.text("subheader")


def test_first_run_defaults(store, paths):
    configurator, _ = _configurator(store, paths, ["", "", "", "dsn"])

    config = configurator.run()

    assert config.PORT == "3000"
    assert config.DATA_DIR == str(paths.default_data_dir)
    assert config.TZ == "Asia/Shanghai"
    assert config.BATCH_UPDATE_ENABLED == "true"
    assert config.STREAMING_TIMEOUT == "360"
    assert config.ERROR_LOG_ENABLED == "true"
    assert config.REDIS_CONN_STRING == ""


def test_blank_dsn_aborts_before_later_prompts(store, paths):
    configurator, console = _configurator(store, paths, ["", "", "", "   "])

    with pytest.raises(MissingRequiredField) as excinfo:
        configurator.run()

    assert excinfo.value.field == "SQL_DSN"
    assert len(console.prompts) == 4
    assert not store.exists()
    assert not paths.compose_file.exists()


def test_reconfiguration_preserves_values_and_secret(store, paths):
    first, _ = _configurator(store, paths, ["8080", "", "UTC", "dsn", "redis://r:6379"])
    original = first.run()

    again, console = _configurator(store, paths)
    updated = again.run()

    assert updated == original
    assert "modify mode" in console.text("warn")


def test_secret_defaults_are_masked(store, paths):
    configurator, console = _configurator(store, paths, ["", "", "", "dsn"])

    configurator.run()

    secret_labels = {label for label, _default, secret in console.prompts if secret}
    assert secret_labels == {f.label for f in CONFIG_FIELDS if f.secret}


def test_run_creates_data_directories_and_manifest(store, paths, project_dir):
    configurator, _ = _configurator(store, paths, ["", "", "", "dsn"])

    config = configurator.run()

    assert paths.host_data_dir(config.DATA_DIR).is_dir()
    assert paths.host_logs_dir(config.DATA_DIR).is_dir()
    assert paths.compose_file.is_file()
    assert store.load().PROJECT_DIR == str(project_dir)


def test_generate_session_secret():
    secret = generate_session_secret()

    assert len(secret) == 32
    assert secret.isalnum()
    assert generate_session_secret() != secret
