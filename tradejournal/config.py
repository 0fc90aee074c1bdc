"""Configuration for TradeJournal.

Settings live in a TOML file (``~/.config/tradejournal/config.toml`` by
default, overridable with the ``TRADEJOURNAL_CONFIG`` environment variable)
and are passed explicitly to whatever needs them.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

from tradejournal.calculator.forex import DEPOSIT_RATES
from tradejournal.performance.risk import DEFAULT_DAILY_LOSS_GOAL

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "tradejournal"
CONFIG_ENV_VAR = "TRADEJOURNAL_CONFIG"


class ConfigError(Exception):
    """Raised when the configuration file cannot be read."""


class JournalSettings(BaseModel):
    db_path: Path = Field(
        default=CONFIG_DIR / "tradejournal.db",
        description="SQLite database file",
    )
    default_journal: Optional[str] = Field(
        default=None,
        description="Journal name used when --journal is not given",
    )

    @field_validator("db_path")
    @classmethod
    def _expand_home(cls, value: Path) -> Path:
        return value.expanduser()


class RiskSettings(BaseModel):
    daily_loss_goal: float = Field(
        default=DEFAULT_DAILY_LOSS_GOAL,
        gt=0,
        description="Maximum tolerated loss per day",
    )


class CalculatorSettings(BaseModel):
    deposit_currency: str = Field(default="USD", description="Account currency")

    @field_validator("deposit_currency")
    @classmethod
    def _known_currency(cls, value: str) -> str:
        if value.upper() not in DEPOSIT_RATES:
            raise ValueError(f"Unsupported deposit currency: {value}")
        return value.upper()


class Settings(BaseModel):
    """All user settings."""

    journal: JournalSettings = Field(default_factory=JournalSettings)
    risk: RiskSettings = Field(default_factory=RiskSettings)
    calculator: CalculatorSettings = Field(default_factory=CalculatorSettings)


def get_config_path(path: Optional[Path] = None) -> Path:
    """Resolve the config file path.

    Args:
        path: Explicit path, takes precedence over the environment.

    Returns:
        Path to the config file (it may not exist).
    """
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return CONFIG_DIR / "config.toml"


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from TOML, falling back to defaults.

    A missing file gives default settings.

    Raises:
        ConfigError: If the file is not valid TOML or has invalid values.
    """
    config_path = get_config_path(path)

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return Settings()

    try:
        data = toml.load(config_path)
    except toml.TomlDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {config_path}: {e}") from e

    logger.debug("Loaded settings from %s", config_path)
    return settings


def create_template_config(path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Returns:
        Path of the written file.
    """
    config_path = get_config_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    defaults = Settings()
    template = {
        "journal": {
            "db_path": str(defaults.journal.db_path),
            "default_journal": "",
        },
        "risk": {
            "daily_loss_goal": defaults.risk.daily_loss_goal,
        },
        "calculator": {
            "deposit_currency": defaults.calculator.deposit_currency,
        },
    }

    with open(config_path, "w") as f:
        toml.dump(template, f)

    return config_path
