"""Deployment configuration fields.

The configuration is a fixed, ordered set of keys. This module is the single
registry describing each key: where it is persisted, how it is prompted for
and its default. ENVIRONMENT_KEYS fixes which keys reach the container.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ConfigField:
    """Description of a single configuration key.

    Attributes:
        key: Persisted key name (also the container environment name)
        section: Section comment the key is grouped under in the config file
        label: Prompt text shown to the operator
        default: Default offered when no value is stored yet
        hint: Optional format hint printed before the prompt
        secret: Whether the current value is masked in prompts
        required: Whether an empty value is rejected
        prompted: Whether the operator is asked for this key
    """

    key: str
    section: str
    label: str = ""
    default: str = ""
    hint: str | None = None
    secret: bool = False
    required: bool = False
    prompted: bool = True


SECTION_BASIC = "Basic"
SECTION_DATABASE = "Database"
SECTION_REDIS = "Redis (optional)"
SECTION_SESSION = "Session and security"
SECTION_PERFORMANCE = "Performance"
SECTION_FEATURES = "Features (optional)"
SECTION_PROJECT = "Project path (used to update the code)"

SQL_DSN = "SQL_DSN"
SESSION_SECRET = "SESSION_SECRET"
DATA_DIR = "DATA_DIR"
PORT = "PORT"
PROJECT_DIR = "PROJECT_DIR"

# Persisted (and prompted) order
CONFIG_FIELDS: tuple[ConfigField, ...] = (
    ConfigField(PORT, SECTION_BASIC, "Service port", default="3000"),
    # Default depends on the config directory; resolved by the configurator
    ConfigField(DATA_DIR, SECTION_BASIC, "Data directory"),
    ConfigField("TZ", SECTION_BASIC, "Time zone", default="Asia/Shanghai"),
    ConfigField(
        SQL_DSN,
        SECTION_DATABASE,
        "MySQL connection string (SQL_DSN)",
        hint="Format: user:password@tcp(host:port)/dbname?charset=utf8mb4&parseTime=True&loc=Local",
        secret=True,
        required=True,
    ),
    ConfigField(
        "REDIS_CONN_STRING",
        SECTION_REDIS,
        "Redis connection string",
        hint="Format: redis://:password@host:port/db, or leave empty to disable",
        secret=True,
    ),
    ConfigField(
        SESSION_SECRET,
        SECTION_SESSION,
        "Session secret (required for multi-node deployments)",
        secret=True,
    ),
    ConfigField(
        "SYNC_FREQUENCY",
        SECTION_PERFORMANCE,
        "Database sync frequency in seconds (empty disables)",
    ),
    ConfigField(
        "BATCH_UPDATE_ENABLED",
        SECTION_PERFORMANCE,
        "Enable batch updates (true/false)",
        default="true",
    ),
    ConfigField(
        "STREAMING_TIMEOUT",
        SECTION_PERFORMANCE,
        "Streaming timeout in seconds",
        default="360",
    ),
    ConfigField(
        "RELAY_TIMEOUT",
        SECTION_PERFORMANCE,
        "Request timeout in seconds (0 or empty for no limit)",
    ),
    ConfigField(
        "MEMORY_CACHE_ENABLED",
        SECTION_PERFORMANCE,
        "Enable in-memory cache (true/false/empty)",
    ),
    ConfigField(
        "ERROR_LOG_ENABLED",
        SECTION_FEATURES,
        "Enable error logging (true/false)",
        default="true",
    ),
    ConfigField(
        "GEMINI_VISION_MAX_IMAGE_NUM",
        SECTION_FEATURES,
        "Gemini max image count (empty for default)",
    ),
    ConfigField(
        "GET_MEDIA_TOKEN",
        SECTION_FEATURES,
        "Count image tokens (true/false/empty)",
    ),
    ConfigField(
        "GET_MEDIA_TOKEN_NOT_STREAM",
        SECTION_FEATURES,
        "Count image tokens in non-stream mode (true/false/empty)",
    ),
    ConfigField(
        "COHERE_SAFETY_SETTING",
        SECTION_FEATURES,
        "Cohere safety setting (NONE/empty)",
    ),
    ConfigField("DIFY_DEBUG", SECTION_FEATURES, "Dify debug mode (true/false/empty)"),
    ConfigField("NODE_TYPE", SECTION_FEATURES, "Node type (master/empty)"),
    ConfigField(
        "FRONTEND_BASE_URL",
        SECTION_FEATURES,
        "Frontend base URL (empty for default)",
    ),
    ConfigField(PROJECT_DIR, SECTION_PROJECT, prompted=False),
)

CONFIG_KEYS: tuple[str, ...] = tuple(f.key for f in CONFIG_FIELDS)

# Order of the container environment block; DATA_DIR and PROJECT_DIR only
# drive the deployment and never reach the container
ENVIRONMENT_KEYS: tuple[str, ...] = (
    "PORT",
    "SQL_DSN",
    "REDIS_CONN_STRING",
    "TZ",
    "SESSION_SECRET",
    "SYNC_FREQUENCY",
    "BATCH_UPDATE_ENABLED",
    "STREAMING_TIMEOUT",
    "RELAY_TIMEOUT",
    "MEMORY_CACHE_ENABLED",
    "ERROR_LOG_ENABLED",
    "GEMINI_VISION_MAX_IMAGE_NUM",
    "GET_MEDIA_TOKEN",
    "GET_MEDIA_TOKEN_NOT_STREAM",
    "COHERE_SAFETY_SETTING",
    "DIFY_DEBUG",
    "NODE_TYPE",
    "FRONTEND_BASE_URL",
)

