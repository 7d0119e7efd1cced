"""
Configuration

Process settings read from the environment (and an optional .env file).
Command-line flags take precedence over these values.
"""

import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shuffler.core.errors import ConfigError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Environment-backed settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    DATABASE_URL: Optional[str] = Field(None, description="Fallback database URL")
    CONNECT_TIMEOUT: float = Field(60.0, gt=0, description="Connect timeout (seconds)")

    # Execution
    EXIT_ON_FAIL: bool = Field(True, description="Abort the run on the first failed statement")

    # Logging
    LOG_LEVEL: str = Field("DEBUG", description="Root log level")
    LOG_FORMAT: str = "%(asctime)s %(levelname)-5s %(name)s: %(message)s"
    LOG_FILE: Optional[str] = None


settings = Settings()


def resolve_database_url(flag: Optional[str], cfg: Optional[Settings] = None) -> str:
    """
    Pick the database URL: explicit flag, then DATABASE_URL.

    Raises:
        ConfigError: neither source provides a URL.
    """
    if flag:
        return flag

    cfg = cfg if cfg is not None else settings
    logger.warning("Option --connect not set, using $DATABASE_URL.")
    if cfg.DATABASE_URL:
        return cfg.DATABASE_URL
    raise ConfigError("No database URL: pass --connect or set DATABASE_URL")
