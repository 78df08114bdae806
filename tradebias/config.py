"""Configuration loading for TradeBias.

Settings live in a TOML file, by default
``~/.config/tradebias/config.toml``:

    [display]
    currency = "$"

    [logging]
    level = "WARNING"

    [ingest]
    strict = false
"""

from pathlib import Path
from typing import Literal, Optional, Union

import toml
from pydantic import BaseModel, Field, ValidationError

from tradebias.errors import ConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "tradebias" / "config.toml"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class DisplaySettings(BaseModel):
    currency: str = Field(default="$", description="Currency symbol for amounts")


class LoggingSettings(BaseModel):
    level: LogLevel = Field(default="WARNING", description="Root log level")


class IngestSettings(BaseModel):
    strict: bool = Field(default=False, description="Abort analysis on any invalid row")


class Settings(BaseModel):
    """All TradeBias settings."""

    display: DisplaySettings = Field(default_factory=DisplaySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    ingest: IngestSettings = Field(default_factory=IngestSettings)

    model_config = {"frozen": True}


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Config file path. Defaults to DEFAULT_CONFIG_PATH.

    Returns:
        Settings; defaults when the file does not exist.

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return Settings()

    try:
        data = toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    log_section = data.get("logging")
    if isinstance(log_section, dict) and isinstance(log_section.get("level"), str):
        log_section["level"] = log_section["level"].upper()

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {config_path}: {e}") from e
