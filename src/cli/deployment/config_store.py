"""Persistent deployment configuration.

The configuration lives in a line-oriented ``KEY='value'`` file with ``#``
comments. Values are opaque data: they are written wrapped in single quotes
and read back by literal ``key=value`` splitting, so nothing in a value is
ever evaluated or unescaped. The file may hold credentials, so it is only
readable by its owner.

ConfigStore is the only component that touches the file; everything else
receives an immutable DeploymentConfig snapshot.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator, Mapping
from datetime import datetime
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import InvalidValue, MissingRequiredField, NotConfigured
from .fields import CONFIG_FIELDS, CONFIG_KEYS, PROJECT_DIR, SQL_DSN

CONFIG_FILE_MODE = 0o600
CONFIG_TITLE = "# New API deployment configuration"


class DeploymentConfig(BaseModel):
    """Snapshot of every deployment parameter.

    Field names are the persisted keys, declared in persisted order. Unset
    values are empty strings.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    PORT: str = ""
    DATA_DIR: str = ""
    TZ: str = ""
    SQL_DSN: str = ""
    REDIS_CONN_STRING: str = ""
    SESSION_SECRET: str = ""
    SYNC_FREQUENCY: str = ""
    BATCH_UPDATE_ENABLED: str = ""
    STREAMING_TIMEOUT: str = ""
    RELAY_TIMEOUT: str = ""
    MEMORY_CACHE_ENABLED: str = ""
    ERROR_LOG_ENABLED: str = ""
    GEMINI_VISION_MAX_IMAGE_NUM: str = ""
    GET_MEDIA_TOKEN: str = ""
    GET_MEDIA_TOKEN_NOT_STREAM: str = ""
    COHERE_SAFETY_SETTING: str = ""
    DIFY_DEBUG: str = ""
    NODE_TYPE: str = ""
    FRONTEND_BASE_URL: str = ""
    PROJECT_DIR: str = ""

    @field_validator("*")
    @classmethod
    def _single_line(cls, value: str) -> str:
        # Covers every separator str.splitlines() honours, not just \n and \r
        if value.splitlines() not in ([], [value]):
            raise ValueError("configuration values must be a single line")
        return value

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> DeploymentConfig:
        """Build a config from a mapping, ignoring unrecognized keys.

        Raises:
            InvalidValue: If a value spans more than one line
        """
        try:
            return cls(**{key: values[key] for key in CONFIG_KEYS if key in values})
        except ValidationError as e:
            raise InvalidValue(
                "Configuration values must be a single line", details=str(e)
            ) from e

    def get(self, key: str) -> str:
        """Get the value of a configuration key.

        Raises:
            KeyError: If the key is not a recognized configuration key
        """
        if key not in CONFIG_KEYS:
            raise KeyError(key)
        value: str = getattr(self, key)
        return value

    def items(self) -> Iterator[tuple[str, str]]:
        """Iterate (key, value) pairs in persisted order."""
        for key in CONFIG_KEYS:
            yield key, getattr(self, key)


def _unquote(value: str) -> str:
    """Strip one layer of matching single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_config_text(text: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines literally.

    Blank lines and ``#`` comments are skipped. The key is everything before
    the first ``=``; the value is everything after it, with one layer of
    surrounding quotes removed. Later duplicates win.
    """
    values: dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition("=")
        if not sep:
            logger.debug(f"Ignoring malformed config line: {key}")
            continue
        values[key.strip()] = _unquote(value.strip())
    return values


class ConfigStore:
    """Reads and writes the deployment configuration file.

    Attributes:
        path: Location of the configuration file
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the configuration file
        """
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def is_configured(self, manifest_path: Path) -> bool:
        """Check that both the configuration and its rendered manifest exist."""
        return self.exists() and Path(manifest_path).is_file()

    def _read_values(self) -> dict[str, str]:
        return parse_config_text(self.path.read_text(encoding="utf-8"))

    def load(self) -> DeploymentConfig:
        """Load the stored configuration.

        Returns:
            DeploymentConfig snapshot of the file

        Raises:
            NotConfigured: If the configuration file does not exist
        """
        if not self.exists():
            raise NotConfigured(
                "Deployment is not configured yet",
                details=f"No configuration file at {self.path}\n"
                "Run the 'config' command first.",
            )
        values = self._read_values()
        unknown = sorted(set(values) - set(CONFIG_KEYS))
        if unknown:
            logger.debug(f"Ignoring unrecognized config keys: {unknown}")
        return DeploymentConfig.from_mapping(values)

    def get_or_default(self, key: str, default: str = "") -> str:
        """Get a stored value, or ``default`` when it is unset or the file is absent."""
        if not self.exists():
            return default
        return self._read_values().get(key) or default

    def save(
        self, config: DeploymentConfig, *, project_dir: Path | None = None
    ) -> Path:
        """Write the whole configuration, replacing any previous file.

        Args:
            config: Configuration to persist
            project_dir: Source checkout recorded alongside the configuration

        Returns:
            Path to the written file

        Raises:
            MissingRequiredField: If the database connection string is empty;
                nothing is written in that case
            InvalidValue: If a value spans more than one line
        """
        if not config.SQL_DSN:
            raise MissingRequiredField(
                SQL_DSN, details="A database connection string must be provided."
            )
        if project_dir is not None:
            config = config.model_copy(update={PROJECT_DIR: str(project_dir)})
        # model_copy skips validation
        config = DeploymentConfig.from_mapping(dict(config.items()))

        self.path.parent.mkdir(parents=True, exist_ok=True)
        content = self.render(config)

        # mkstemp creates the file owner-only, so the secret never hits a
        # world-readable inode before the replace
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.chmod(tmp_path, CONFIG_FILE_MODE)
            os.replace(tmp_path, self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

        logger.info(f"Configuration written to {self.path}")
        return self.path

    @staticmethod
    def render(config: DeploymentConfig) -> str:
        """Serialize a configuration to the file format."""
        generated_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        lines = [
            CONFIG_TITLE,
            f"# Generated at: {generated_at}",
            f"# Project directory: {config.PROJECT_DIR}",
        ]

        section = None
        for field in CONFIG_FIELDS:
            if field.section != section:
                section = field.section
                lines.extend(["", f"# {section}"])
            lines.append(f"{field.key}='{config.get(field.key)}'")

        return "\n".join(lines) + "\n"
