"""Configuration management for stamp."""

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


# stamp data directory (defaults to ~/.stamp)
STAMP_HOME = Path(
    get_env("STAMP_HOME", os.path.expanduser("~/.stamp"))
    or os.path.expanduser("~/.stamp")
).expanduser()

CONFIG_FILE = STAMP_HOME / "config.yaml"
DEFAULT_COUNTER_FILE = STAMP_HOME / "counters.json"

# Timezone override (empty means system local time)
TIMEZONE = get_env("STAMP_TIMEZONE", "") or ""

# Project counter starting number for fresh counter files
DEFAULT_PROJECT_START = get_env_int("STAMP_PROJECT_START", 395)

# Logging
LOG_LEVEL = get_env("STAMP_LOG_LEVEL", "WARNING") or "WARNING"


class ConfigError(Exception):
    """Raised when the configuration file is invalid."""

    pass


class StampConfig(BaseModel):
    """Typed configuration loaded from config.yaml.

    All fields are optional so partial files overlay the defaults.
    Extra fields are forbidden to catch typos.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    timezone: str = TIMEZONE
    always_extension: bool = get_env_bool("STAMP_ALWAYS_EXTENSION", False)
    counter_file: Path = DEFAULT_COUNTER_FILE
    project_start: int = Field(
        default=DEFAULT_PROJECT_START,
        ge=0,
        description="First number of the persisted project counter "
        "(the directory-scanning project command ignores it)",
    )

    @field_validator("timezone", mode="before")
    @classmethod
    def _none_timezone(cls, value):
        return "" if value is None else value

    @field_validator("counter_file", mode="after")
    @classmethod
    def _expand_counter_file(cls, value: Path) -> Path:
        return value.expanduser()


def load_config(path: Path | str | None = None) -> StampConfig:
    """
    Load configuration, overlaying the file on the defaults.

    Args:
        path: Config file path (defaults to ~/.stamp/config.yaml)

    Returns:
        StampConfig. Defaults when the file is missing or empty.

    Raises:
        ConfigError: If the file is unreadable, invalid YAML, or fails validation.
    """
    config_file = Path(path).expanduser() if path else CONFIG_FILE

    if not config_file.exists():
        logger.debug("No config file at %s", config_file)
        return StampConfig()

    try:
        with open(config_file, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {config_file}: {e}") from e

    if raw is None:
        return StampConfig()

    if not isinstance(raw, dict):
        raise ConfigError(
            f"{config_file.name} must be a mapping, got {type(raw).__name__}"
        )

    try:
        config = StampConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_file}: {e}") from e

    logger.debug("Config loaded from %s", config_file)
    return config


def save_config(config: StampConfig, path: Path | str | None = None) -> Path:
    """
    Write configuration to YAML.

    Args:
        config: Configuration to write
        path: Destination (defaults to ~/.stamp/config.yaml)

    Returns:
        Path written
    """
    config_file = Path(path).expanduser() if path else CONFIG_FILE
    config_file.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json")
    with open(config_file, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False)
    return config_file


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure and return logger."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.WARNING),
    )
    return logging.getLogger(__name__)
