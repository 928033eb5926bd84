"""
Marketplace configuration parameters.

Defines storage locations, logging options and auction policy switches.
Values are resolved by pydantic-settings, highest precedence first:
explicit keyword arguments (including a JSON config file passed to
``load_config``), ``ARTMARKET_*`` environment variables, a ``.env`` file,
then the defaults below.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "ARTMARKET_"

# Carried for compatibility with existing deployments; auctions never expire.
DEFAULT_AUCTION_TIMEOUT = 9600

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class MarketConfig(BaseSettings):
    """Marketplace-wide configuration parameters"""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    data_dir: Path = Path("data")
    db_name: str = "market.db"

    # Logging
    log_dir: Path = Path("logs")
    log_level: str = "INFO"
    log_to_file: bool = False

    # Auction policy
    auction_timeout: int = DEFAULT_AUCTION_TIMEOUT  # not consumed by the engine
    single_active_auction: bool = True  # at most one pending auction per token

    @field_validator("data_dir", "log_dir")
    @classmethod
    def _expand_path(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)

    def ensure_directories(self) -> None:
        """Create data and log directories"""
        self.data_dir.mkdir(exist_ok=True, parents=True)
        if self.log_to_file:
            self.log_dir.mkdir(exist_ok=True, parents=True)


def load_config(
    config_path: Optional[str] = None,
    env_file: Optional[str] = None,
) -> MarketConfig:
    """
    Load configuration from a JSON file, the environment and a .env file.

    Args:
        config_path: Optional path to a JSON config file
        env_file: Optional path to a .env file (default: ./.env)

    Returns:
        MarketConfig instance

    Raises:
        pydantic.ValidationError: a value cannot be converted (e.g. a
            malformed boolean or integer in the environment)
    """
    overrides = {}
    if config_path:
        overrides = json.loads(Path(config_path).read_text(encoding="utf-8"))
        if not isinstance(overrides, dict):
            raise ValueError(f"Config file {config_path} must contain a JSON object")

    if env_file:
        return MarketConfig(_env_file=env_file, **overrides)
    return MarketConfig(**overrides)
