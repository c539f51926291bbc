"""Configuration management for attrcheck using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from attrcheck.validation import parse_rules

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".attrcheck.json"


class OutputFormat(str, Enum):
    """Output format types."""
    TABLE = "table"
    JSON = "json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.TABLE

    model_config = ConfigDict(use_enum_values=True, validate_default=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True, validate_default=True)


class AttrcheckConfig(BaseModel):
    """Complete attrcheck configuration model."""
    attributes: dict[str, str] = Field(default_factory=dict)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("attributes")
    @classmethod
    def validate_attribute_rules(cls, v):
        """Reject attribute rule definitions that do not parse."""
        for attribute, definition in v.items():
            if not attribute.strip():
                raise ValueError("attribute names must not be blank")
            try:
                parse_rules(definition)
            except ValueError as e:
                raise ValueError(f"invalid rules for attribute '{attribute}': {e}")
        return v

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> AttrcheckConfig:
    """Load attribute rules and settings from a JSON file.

    With no path, the nearest .attrcheck.json in the current directory or
    its parents is used, and defaults apply when none exists. A path that
    is given must exist.

    Raises:
        FileNotFoundError: If config_path is given but does not exist
        ValueError: If the file is not valid JSON or fails validation
    """
    if config_path is None:
        path = find_config_file()
        if path is None:
            logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
            return create_default_config()
    else:
        path = Path(config_path)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")

    logger.debug(f"Loading configuration from {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")

    try:
        return AttrcheckConfig(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {path}: {e}") from e


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest .attrcheck.json at or above start_dir, if any."""
    start = Path.cwd() if start_dir is None else Path(start_dir)
    start = start.resolve()

    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate

    return None


def create_default_config() -> AttrcheckConfig:
    """Create zero-config defaults: no attributes, table output."""
    return AttrcheckConfig()
